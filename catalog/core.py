import math
import re
import secrets
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_CATEGORY
from .models import Product

# Plain decimal with optional exponent, ASCII digits only.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


# ---------------------------
# Numeric coercion
# ---------------------------
def parse_number(value: Any) -> Union[int, float]:
    """
    Read value as a finite number. Booleans and null are not numbers;
    strings are stripped and must be plain decimals ("12", "4.5", "1e3").
    """
    if isinstance(value, bool):
        raise ValueError("not a number")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not _NUMBER_RE.fullmatch(raw):
            raise ValueError("not a number")
        value = float(raw)
    if not isinstance(value, float) or not math.isfinite(value):
        raise ValueError("not a number")
    return value


def parse_integer(value: Any) -> int:
    num = parse_number(value)
    if isinstance(num, float):
        if not num.is_integer():
            raise ValueError("not an integer")
        return int(num)
    return num


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("not a string")
    return value.strip()


# ---------------------------
# Pydantic input schemas
# ---------------------------
class _ProductFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @field_validator("title", "category", mode="before", check_fields=False)
    @classmethod
    def check_non_empty_text(cls, v):
        text = _text(v)
        if not text:
            raise ValueError("empty string")
        return text

    @field_validator("description", "image_url", mode="before", check_fields=False)
    @classmethod
    def check_plain_text(cls, v):
        return _text(v)

    @field_validator("price", "rating", mode="before", check_fields=False)
    @classmethod
    def check_number(cls, v):
        return parse_number(v)

    @field_validator("stock", mode="before", check_fields=False)
    @classmethod
    def check_stock(cls, v):
        return parse_integer(v)


class ProductIn(_ProductFields):
    """Body of a create request. Title and price are required."""

    title: str
    category: Optional[str] = None
    description: str = ""
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    image_url: str = Field(default="", alias="imageUrl")

    @field_validator("stock", mode="before")
    @classmethod
    def check_stock(cls, v):
        # a stock that is not a number at all falls back to 0 on create
        try:
            num = parse_number(v)
        except ValueError:
            return 0
        return parse_integer(num)


class ProductPatch(_ProductFields):
    """Body of a patch request; only the fields sent are checked and applied."""

    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    def changes(self):
        return {name: getattr(self, name) for name in self.model_fields_set}


# ---------------------------
# Record construction
# ---------------------------
def generate_id(existing: Iterable[str] = ()) -> str:
    taken = set(existing)
    while True:
        # 6 random bytes encode to exactly 8 url-safe characters
        pid = secrets.token_urlsafe(6)
        if pid not in taken:
            return pid


def make_product(product_id: str, p: ProductIn) -> Product:
    return Product(
        id=product_id,
        title=p.title,
        category=p.category if p.category is not None else DEFAULT_CATEGORY,
        description=p.description,
        price=p.price,
        stock=p.stock,
        rating=p.rating,
        image_url=p.image_url,
    )
