"""Contact message router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_staff
from ...database import get_db
from ...models import UserProfile
from .schemas import ContactMessageCreate, ContactMessageResponse
from .service import MessageService

router = APIRouter(tags=["Messages"])


def get_message_service(db: Session = Depends(get_db)) -> MessageService:
    """Dependency injection for MessageService"""
    return MessageService(db)


@router.post("/contact", response_model=ContactMessageResponse, status_code=201)
async def submit_contact_message(
    data: ContactMessageCreate,
    service: MessageService = Depends(get_message_service),
):
    """Public contact form"""
    return service.submit(data)


@router.get("/admin/messages", response_model=list[ContactMessageResponse])
async def list_messages(
    current_staff: UserProfile = Depends(get_current_staff),
    service: MessageService = Depends(get_message_service),
):
    return service.get_messages()


@router.post("/admin/messages/{message_id}/read", response_model=ContactMessageResponse)
async def mark_message_read(
    message_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: MessageService = Depends(get_message_service),
):
    return service.mark_as_read(message_id)


@router.delete("/admin/messages/{message_id}")
async def delete_message(
    message_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: MessageService = Depends(get_message_service),
):
    return service.delete_message(message_id)
