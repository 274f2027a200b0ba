"""Gallery schemas"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import GalleryImage

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def normalize_tag_name(name: str) -> str:
    return name.strip().lower()


class TagCreate(BaseModel):
    name: str
    color: str = "#6366f1"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = normalize_tag_name(v)
        if not v:
            raise ValueError("Tag name cannot be empty")
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        if not HEX_COLOR.match(v):
            raise ValueError("Color must be a hex value like #6366f1")
        return v


class TagUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = normalize_tag_name(v)
        if not v:
            raise ValueError("Tag name cannot be empty")
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        if v is not None and not HEX_COLOR.match(v):
            raise ValueError("Color must be a hex value like #6366f1")
        return v


class TagResponse(BaseModel):
    id: str
    name: str
    color: str

    class Config:
        from_attributes = True


class TagWithCount(TagResponse):
    count: int


class GalleryImageResponse(BaseModel):
    id: str
    imageUrl: str
    caption: str
    isPublic: bool
    createdAt: datetime
    tags: list[TagResponse]

    @classmethod
    def from_image(cls, image: GalleryImage) -> "GalleryImageResponse":
        return cls(
            id=image.id,
            imageUrl=image.image_url,
            caption=image.caption,
            isPublic=image.is_public,
            createdAt=image.created_at,
            tags=[TagResponse.model_validate(tag) for tag in image.tags],
        )


class PublicGalleryResponse(BaseModel):
    images: list[GalleryImageResponse]
    tags: list[TagWithCount]
