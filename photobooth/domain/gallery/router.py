"""Gallery router - Public gallery and back-office image/tag endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ...auth import get_current_staff
from ...database import get_db
from ...models import UserProfile
from .schemas import (
    GalleryImageResponse,
    PublicGalleryResponse,
    TagCreate,
    TagResponse,
    TagUpdate,
    TagWithCount,
)
from .service import GalleryService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Gallery"])


def get_gallery_service(db: Session = Depends(get_db)) -> GalleryService:
    """Dependency injection for GalleryService"""
    return GalleryService(db)


@router.get("/gallery", response_model=PublicGalleryResponse)
async def get_public_gallery(service: GalleryService = Depends(get_gallery_service)):
    images, tags = service.get_public_gallery()
    return PublicGalleryResponse(
        images=[GalleryImageResponse.from_image(image) for image in images],
        tags=[TagWithCount(**tag) for tag in tags],
    )


@router.get("/admin/gallery", response_model=list[GalleryImageResponse])
async def list_gallery_images(
    current_staff: UserProfile = Depends(get_current_staff),
    service: GalleryService = Depends(get_gallery_service),
):
    return [GalleryImageResponse.from_image(image) for image in service.get_all_images()]


@router.post("/admin/gallery", response_model=GalleryImageResponse, status_code=201)
async def upload_gallery_image(
    file: UploadFile = File(...),
    caption: Optional[str] = Form(None),
    is_public: bool = Form(True),
    tag_ids: list[str] = Form([]),
    current_staff: UserProfile = Depends(get_current_staff),
    service: GalleryService = Depends(get_gallery_service),
):
    """Upload an image to storage and add it to the gallery"""
    data = await file.read()
    logger.info(f"Gallery upload by {current_staff.email}: {file.filename} ({len(data)} bytes)")
    image = service.upload_image(
        data,
        file.filename or "",
        file.content_type,
        caption=caption,
        is_public=is_public,
        tag_ids=tag_ids,
    )
    return GalleryImageResponse.from_image(image)


@router.delete("/admin/gallery/{image_id}")
async def delete_gallery_image(
    image_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: GalleryService = Depends(get_gallery_service),
):
    return service.delete_image(image_id)


@router.get("/admin/gallery-tags", response_model=list[TagWithCount])
async def list_gallery_tags(
    current_staff: UserProfile = Depends(get_current_staff),
    service: GalleryService = Depends(get_gallery_service),
):
    """Tags sorted by name with the number of images using each"""
    return [TagWithCount(**tag) for tag in service.get_tags_with_counts()]


@router.post("/admin/gallery-tags", response_model=TagResponse, status_code=201)
async def create_gallery_tag(
    data: TagCreate,
    current_staff: UserProfile = Depends(get_current_staff),
    service: GalleryService = Depends(get_gallery_service),
):
    return service.create_tag(data)


@router.patch("/admin/gallery-tags/{tag_id}", response_model=TagResponse)
async def update_gallery_tag(
    tag_id: str,
    data: TagUpdate,
    current_staff: UserProfile = Depends(get_current_staff),
    service: GalleryService = Depends(get_gallery_service),
):
    return service.update_tag(tag_id, data)


@router.delete("/admin/gallery-tags/{tag_id}")
async def delete_gallery_tag(
    tag_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: GalleryService = Depends(get_gallery_service),
):
    return service.delete_tag(tag_id)
