"""Staff router - Admin accounts and own profile"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_staff
from ...database import get_db
from ...identity import IdentityClient, get_identity_client
from ...models import UserProfile
from .schemas import (
    AdminCreate,
    PasswordChange,
    PasswordResetResponse,
    ProfileUpdate,
    StaffResponse,
)
from .service import StaffService

router = APIRouter(prefix="/admin", tags=["Admin - Staff"])


def get_staff_service(
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
) -> StaffService:
    """Dependency injection for StaffService"""
    return StaffService(db, identity)


@router.get("/staff", response_model=list[StaffResponse])
async def list_admins(
    current_staff: UserProfile = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    return service.get_admins()


@router.post("/staff", response_model=StaffResponse, status_code=201)
async def create_admin(
    data: AdminCreate,
    current_staff: UserProfile = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    return await service.create_admin(data.email, data.password, data.fullName)


@router.post("/staff/{user_id}/reset-password", response_model=PasswordResetResponse)
async def reset_admin_password(
    user_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    profile, password = await service.reset_password(user_id)
    return PasswordResetResponse(id=profile.id, email=profile.email, password=password)


@router.delete("/staff/{user_id}")
async def delete_admin(
    user_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    return await service.delete_admin(user_id, current_staff)


@router.get("/profile", response_model=StaffResponse)
async def get_own_profile(current_staff: UserProfile = Depends(get_current_staff)):
    return current_staff


@router.patch("/profile", response_model=StaffResponse)
async def update_own_profile(
    data: ProfileUpdate,
    current_staff: UserProfile = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    return service.update_profile(current_staff, data.fullName)


@router.post("/profile/password")
async def change_own_password(
    data: PasswordChange,
    current_staff: UserProfile = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    return await service.change_password(
        current_staff, data.currentPassword, data.newPassword, data.confirmPassword
    )
