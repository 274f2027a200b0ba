"""Staff service - Back-office accounts

Credentials live in the hosted auth service; this side only keeps the
profile row that grants back-office access.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...identity import IdentityClient
from ...models import UserProfile
from ...shared.errors import (
    AppError,
    DuplicateRecordError,
    FormValidationError,
    NotFoundError,
    PermissionDeniedError,
)
from ...shared.validators import generate_secure_password, validate_email_strict, validate_password
from .repository import StaffRepository

logger = logging.getLogger(__name__)


class StaffService:
    def __init__(self, db: Session, identity: IdentityClient):
        self.db = db
        self.identity = identity
        self.repo = StaffRepository()

    def get_admins(self) -> list[UserProfile]:
        return self.repo.get_admins(self.db)

    def get_admin(self, user_id: str) -> UserProfile:
        profile = self.repo.get_profile(self.db, user_id)
        if not profile:
            raise NotFoundError("Administrateur introuvable")
        return profile

    async def create_admin(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> UserProfile:
        """Register the account with the auth service, then grant admin access"""
        email = email.strip().lower()
        errors = {}
        email_check = validate_email_strict(email)
        if not email_check.is_valid:
            errors["email"] = email_check.error
        strength = validate_password(password)
        if not strength.is_valid:
            errors["password"] = f"Mot de passe trop faible: {strength.feedback}"
        if errors:
            raise FormValidationError(errors)

        if self.repo.get_profile_by_email(self.db, email):
            raise DuplicateRecordError("Un administrateur existe déjà avec cet email")

        user = await self.identity.create_user(email, password, full_name)

        try:
            profile = self.repo.create_profile(
                self.db,
                id=user["id"],
                email=email,
                full_name=(full_name or "").strip() or None,
                role="admin",
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Profile for auth user {user['id']} could not be saved: {e}")
            raise AppError("Erreur lors de la création du profil administrateur") from e

        logger.info(f"Admin {profile.id} ({email}) created")
        return profile

    async def reset_password(self, user_id: str) -> tuple[UserProfile, str]:
        """Replace the password with a generated one and return it"""
        profile = self.get_admin(user_id)
        password = generate_secure_password()
        await self.identity.update_user_password(profile.id, password)
        logger.info(f"Password reset for admin {profile.id}")
        return profile, password

    async def delete_admin(self, user_id: str, current: UserProfile) -> dict:
        if user_id == current.id:
            raise PermissionDeniedError("Vous ne pouvez pas supprimer votre propre compte")

        profile = self.get_admin(user_id)
        await self.identity.delete_user(profile.id)

        try:
            self.repo.delete_profile(self.db, profile)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Auth user {user_id} deleted but its profile could not be removed: {e}")
            raise AppError("Erreur lors de la suppression du profil administrateur") from e

        logger.info(f"Admin {user_id} deleted by {current.id}")
        return {"message": "Administrateur supprimé"}

    def update_profile(self, profile: UserProfile, full_name: str) -> UserProfile:
        return self.repo.update_profile(self.db, profile, full_name=full_name.strip() or None)

    async def change_password(
        self, profile: UserProfile, current_password: str, new_password: str, confirm_password: str
    ) -> dict:
        if new_password != confirm_password:
            raise FormValidationError({"confirmPassword": "Les mots de passe ne correspondent pas"})

        strength = validate_password(new_password)
        if not strength.is_valid:
            raise FormValidationError(
                {"newPassword": f"Mot de passe trop faible: {strength.feedback}"}
            )

        if not await self.identity.verify_password(profile.email, current_password):
            raise FormValidationError({"currentPassword": "Mot de passe actuel incorrect"})

        await self.identity.update_user_password(profile.id, new_password)
        logger.info(f"Admin {profile.id} changed their password")
        return {"message": "Mot de passe modifié"}
