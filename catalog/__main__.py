import uvicorn

from .config import HOST, LOG_LEVEL, PORT


def main():
    uvicorn.run("catalog.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
