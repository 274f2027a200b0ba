"""Contact message repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import ContactMessage


class MessageRepository:
    @staticmethod
    def get_messages(db: Session) -> list[ContactMessage]:
        return db.query(ContactMessage).order_by(ContactMessage.created_at.desc()).all()

    @staticmethod
    def get_message(db: Session, message_id: str) -> Optional[ContactMessage]:
        return db.query(ContactMessage).filter(ContactMessage.id == message_id).first()

    @staticmethod
    def create_message(db: Session, **fields) -> ContactMessage:
        message = ContactMessage(**fields)
        db.add(message)
        db.commit()
        db.refresh(message)
        return message

    @staticmethod
    def update_status(db: Session, message: ContactMessage, status: str) -> ContactMessage:
        message.status = status
        db.commit()
        db.refresh(message)
        return message

    @staticmethod
    def delete_message(db: Session, message: ContactMessage) -> None:
        db.delete(message)
        db.commit()
