"""Customer domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CustomerResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    address: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
