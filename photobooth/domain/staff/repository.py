"""Staff profile repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import UserProfile


class StaffRepository:
    @staticmethod
    def get_admins(db: Session) -> list[UserProfile]:
        return (
            db.query(UserProfile)
            .filter(UserProfile.role == "admin")
            .order_by(UserProfile.created_at.asc())
            .all()
        )

    @staticmethod
    def get_profile(db: Session, user_id: str) -> Optional[UserProfile]:
        return db.query(UserProfile).filter(UserProfile.id == user_id).first()

    @staticmethod
    def get_profile_by_email(db: Session, email: str) -> Optional[UserProfile]:
        return db.query(UserProfile).filter(UserProfile.email == email).first()

    @staticmethod
    def create_profile(db: Session, **fields) -> UserProfile:
        profile = UserProfile(**fields)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def update_profile(db: Session, profile: UserProfile, **updates) -> UserProfile:
        for key, value in updates.items():
            setattr(profile, key, value)
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def delete_profile(db: Session, profile: UserProfile) -> None:
        db.delete(profile)
        db.commit()
