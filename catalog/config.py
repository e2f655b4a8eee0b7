# catalog/config.py
import os

from dotenv import load_dotenv

# Settings come from the environment (or a local .env file).

load_dotenv()

HOST = os.getenv("CATALOG_HOST", "127.0.0.1")
PORT = int(os.getenv("CATALOG_PORT", "8085"))

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CATALOG_CORS_ORIGINS", "http://localhost:3001,http://localhost:3002").split(",")
    if o.strip()
]

LOG_LEVEL = os.getenv("CATALOG_LOG_LEVEL", "INFO").upper()

DEFAULT_CATEGORY = os.getenv("CATALOG_DEFAULT_CATEGORY", "Uncategorized")

SEED_ON_STARTUP = os.getenv("CATALOG_SEED", "true").lower() in ("1", "true", "yes")

API_URL = os.getenv("CATALOG_API_URL", f"http://{HOST}:{PORT}")
