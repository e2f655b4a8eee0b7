# catalog/models.py
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = ""
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    image_url: str = Field(default="", alias="imageUrl")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
