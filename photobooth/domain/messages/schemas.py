"""Contact message schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ContactMessageCreate(BaseModel):
    """Contact form as posted by the site; field checks happen in the service"""

    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    subject: str = ""
    message: str = ""


class ContactMessageResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True
