"""Gallery service - Public gallery, uploads and tag management"""

import logging
import secrets
import time
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ... import storage
from ...models import GalleryImage, GalleryTag
from ...shared.errors import (
    UNIQUE_VIOLATION,
    AppError,
    DuplicateRecordError,
    FormValidationError,
    NotFoundError,
    classify_integrity_error,
)
from .repository import GalleryRepository
from .schemas import TagCreate, TagUpdate

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024  # 5MB
ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/webp"]
UPLOAD_PREFIX = "uploads"
DEFAULT_CAPTION = "Photo"


def validate_image_file(content_type: Optional[str], size_bytes: int) -> Optional[str]:
    """Return an error message, or None when the file can be uploaded"""
    if content_type not in ALLOWED_IMAGE_TYPES:
        return "Type de fichier non autorisé. Utilisez JPEG, PNG ou WebP."
    if size_bytes > MAX_IMAGE_SIZE_BYTES:
        return "Le fichier est trop volumineux (maximum 5 Mo)."
    return None


def build_upload_path(filename: str) -> str:
    """uploads/<epoch millis>-<random>.<ext>"""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "jpg"
    return f"{UPLOAD_PREFIX}/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"


def storage_path_from_url(image_url: str) -> str:
    return f"{UPLOAD_PREFIX}/{image_url.rstrip('/').split('/')[-1]}"


class GalleryService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = GalleryRepository()

    def get_public_gallery(self) -> tuple[list[GalleryImage], list[dict]]:
        """Public images newest first, and the tags used by them with their counts"""
        images = self.repo.get_images(self.db, public_only=True)

        counts: dict[str, dict] = {}
        for image in images:
            for tag in image.tags:
                entry = counts.setdefault(
                    tag.id, {"id": tag.id, "name": tag.name, "color": tag.color, "count": 0}
                )
                entry["count"] += 1

        tags = sorted(counts.values(), key=lambda t: t["name"])
        return images, tags

    def get_all_images(self) -> list[GalleryImage]:
        return self.repo.get_images(self.db)

    def get_tags_with_counts(self) -> list[dict]:
        counts = self.repo.get_tag_counts(self.db)
        return [
            {"id": tag.id, "name": tag.name, "color": tag.color, "count": counts.get(tag.id, 0)}
            for tag in self.repo.get_tags(self.db)
        ]

    def upload_image(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str],
        caption: Optional[str] = None,
        is_public: bool = True,
        tag_ids: Optional[list[str]] = None,
    ) -> GalleryImage:
        """Store the file, then record it with its tags"""
        error = validate_image_file(content_type, len(data))
        if error:
            raise FormValidationError({"file": error}, error)

        tag_ids = list(dict.fromkeys(tag_ids or []))
        known = {tag.id for tag in self.repo.get_tags_by_ids(self.db, tag_ids)}
        unknown = [tag_id for tag_id in tag_ids if tag_id not in known]
        if unknown:
            raise NotFoundError(f"Tag introuvable: {', '.join(unknown)}")

        path = build_upload_path(filename)
        public_url = storage.upload(path, data, content_type)

        try:
            image = self.repo.create_image(
                self.db,
                tag_ids,
                image_url=public_url,
                caption=(caption or "").strip() or DEFAULT_CAPTION,
                is_public=is_public,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Gallery row for {path} could not be saved: {e}")
            raise AppError("Erreur lors de l'enregistrement de l'image") from e

        logger.info(f"Gallery image {image.id} uploaded to {path}")
        return image

    def delete_image(self, image_id: str) -> dict:
        image = self.repo.get_image(self.db, image_id)
        if not image:
            raise NotFoundError("Image introuvable")

        storage.remove([storage_path_from_url(image.image_url)])

        try:
            self.repo.delete_image(self.db, image)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Gallery image {image_id} deletion failed: {e}")
            raise AppError("Erreur lors de la suppression de l'image") from e

        logger.info(f"Gallery image {image_id} deleted")
        return {"message": "Image supprimée"}

    def create_tag(self, data: TagCreate) -> GalleryTag:
        try:
            return self.repo.create_tag(self.db, data.name, data.color)
        except IntegrityError as e:
            self.db.rollback()
            raise self._tag_error(e, data.name) from e

    def update_tag(self, tag_id: str, data: TagUpdate) -> GalleryTag:
        tag = self.repo.get_tag(self.db, tag_id)
        if not tag:
            raise NotFoundError("Tag introuvable")
        try:
            return self.repo.update_tag(self.db, tag, name=data.name, color=data.color)
        except IntegrityError as e:
            self.db.rollback()
            raise self._tag_error(e, data.name) from e

    def delete_tag(self, tag_id: str) -> dict:
        tag = self.repo.get_tag(self.db, tag_id)
        if not tag:
            raise NotFoundError("Tag introuvable")
        self.repo.delete_tag(self.db, tag)
        return {"message": "Tag supprimé"}

    def _tag_error(self, error: IntegrityError, name: Optional[str]) -> AppError:
        if classify_integrity_error(error) == UNIQUE_VIOLATION:
            logger.warning(f"Tag '{name}' already exists")
            return DuplicateRecordError("Ce tag existe déjà")
        logger.error(f"Tag '{name}' could not be saved: {error}")
        return AppError("Erreur lors de l'enregistrement du tag")
