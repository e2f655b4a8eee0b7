# catalog/errors.py
from typing import List

from pydantic import ValidationError

FIELD_MESSAGES = {
    "title": "title is required (string)",
    "category": "category must be a non-empty string",
    "description": "description must be a string",
    "price": "price must be a non-negative number",
    "stock": "stock must be a non-negative integer",
    "rating": "rating must be a number between 0 and 5",
    "imageUrl": "imageUrl must be a string",
    "image_url": "imageUrl must be a string",
}


class CatalogError(Exception):
    """Base error raised by the catalog service; carries the HTTP status to answer with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class NotFoundError(CatalogError):
    status_code = 404

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class BadRequestError(CatalogError):
    status_code = 400


class ValidationFailedError(CatalogError):
    """One or more field-level violations, all reported together."""

    status_code = 400

    def __init__(self, errors: List[str]):
        super().__init__("Validation failed")
        self.errors = list(errors)

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "ValidationFailedError":
        """One message per offending field, in schema order."""
        messages: List[str] = []
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "body"
            message = FIELD_MESSAGES.get(field, f"{field}: {err['msg']}")
            if message not in messages:
                messages.append(message)
        return cls(messages)

    def to_dict(self):
        return {"errors": self.errors}
