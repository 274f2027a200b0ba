"""Catalog schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


def parse_features(text: str) -> list[str]:
    """One feature per line; blank lines dropped"""
    return [line.strip() for line in text.splitlines() if line.strip()]


class ProductUpdate(BaseModel):
    """Fields editable from the back-office; features are typed one per line"""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    features: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip() if v else v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if v is not None and v < 0:
            raise ValueError("Price must be a non-negative number")
        return v


class ProductAdminResponse(BaseModel):
    id: str
    name: str
    description: str
    image_url: str
    price: float
    category: str
    features: list[str]
    available: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
