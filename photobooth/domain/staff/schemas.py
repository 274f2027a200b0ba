"""Staff account schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AdminCreate(BaseModel):
    email: str
    password: str
    fullName: Optional[str] = None


class ProfileUpdate(BaseModel):
    fullName: str


class PasswordChange(BaseModel):
    currentPassword: str
    newPassword: str
    confirmPassword: str


class StaffResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class PasswordResetResponse(BaseModel):
    """The generated password is only ever returned here"""

    id: str
    email: str
    password: str
