"""Gallery repository - Images, tags and the links between them"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from ...models import GalleryImage, GalleryImageTag, GalleryTag


class GalleryRepository:
    @staticmethod
    def get_images(db: Session, public_only: bool = False) -> list[GalleryImage]:
        query = db.query(GalleryImage).options(
            selectinload(GalleryImage.tag_links).joinedload(GalleryImageTag.tag)
        )
        if public_only:
            query = query.filter(GalleryImage.is_public.is_(True))
        return query.order_by(GalleryImage.created_at.desc()).all()

    @staticmethod
    def get_image(db: Session, image_id: str) -> Optional[GalleryImage]:
        return db.query(GalleryImage).filter(GalleryImage.id == image_id).first()

    @staticmethod
    def create_image(db: Session, tag_ids: list[str], **fields) -> GalleryImage:
        """Insert the image row, then its tag links"""
        image = GalleryImage(**fields)
        db.add(image)
        db.commit()
        db.refresh(image)

        if tag_ids:
            for tag_id in tag_ids:
                db.add(GalleryImageTag(image_id=image.id, tag_id=tag_id))
            db.commit()
            db.refresh(image)
        return image

    @staticmethod
    def delete_image(db: Session, image: GalleryImage) -> None:
        db.delete(image)
        db.commit()

    @staticmethod
    def get_tags(db: Session) -> list[GalleryTag]:
        return db.query(GalleryTag).order_by(GalleryTag.name.asc()).all()

    @staticmethod
    def get_tag(db: Session, tag_id: str) -> Optional[GalleryTag]:
        return db.query(GalleryTag).filter(GalleryTag.id == tag_id).first()

    @staticmethod
    def get_tags_by_ids(db: Session, tag_ids: list[str]) -> list[GalleryTag]:
        if not tag_ids:
            return []
        return db.query(GalleryTag).filter(GalleryTag.id.in_(tag_ids)).all()

    @staticmethod
    def get_tag_counts(db: Session) -> dict[str, int]:
        """Number of linked images per tag id"""
        rows = (
            db.query(GalleryImageTag.tag_id, func.count(GalleryImageTag.id))
            .group_by(GalleryImageTag.tag_id)
            .all()
        )
        return {tag_id: count for tag_id, count in rows}

    @staticmethod
    def create_tag(db: Session, name: str, color: str) -> GalleryTag:
        tag = GalleryTag(name=name, color=color)
        db.add(tag)
        db.commit()
        db.refresh(tag)
        return tag

    @staticmethod
    def update_tag(db: Session, tag: GalleryTag, **updates) -> GalleryTag:
        for key, value in updates.items():
            if value is not None:
                setattr(tag, key, value)
        db.commit()
        db.refresh(tag)
        return tag

    @staticmethod
    def delete_tag(db: Session, tag: GalleryTag) -> None:
        db.delete(tag)
        db.commit()
