"""Contact message service - Public contact form and back-office inbox"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import ContactMessage
from ...shared.errors import AppError, FormValidationError, NotFoundError
from ...shared.validators import validate_email_strict, validate_phone_strict
from ...utils.sanitization import sanitize_text
from .repository import MessageRepository
from .schemas import ContactMessageCreate

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


def validate_contact_message(data: ContactMessageCreate) -> dict[str, str]:
    errors = {}
    if not data.name.strip():
        errors["name"] = "Veuillez entrer votre nom"
    elif len(data.name.strip()) > 255:
        errors["name"] = "Le nom est trop long"

    email = validate_email_strict(data.email)
    if not email.is_valid:
        errors["email"] = email.error

    if data.phone and data.phone.strip():
        phone = validate_phone_strict(data.phone)
        if not phone.is_valid:
            errors["phone"] = phone.error

    if not data.subject.strip():
        errors["subject"] = "Veuillez entrer un sujet"
    elif len(data.subject.strip()) > 255:
        errors["subject"] = "Le sujet est trop long"
    if not data.message.strip():
        errors["message"] = "Veuillez entrer votre message"
    elif len(data.message.strip()) > MAX_MESSAGE_LENGTH:
        errors["message"] = f"Le message ne doit pas dépasser {MAX_MESSAGE_LENGTH} caractères"
    return errors


class MessageService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = MessageRepository()

    def submit(self, data: ContactMessageCreate) -> ContactMessage:
        """Store a contact form submission as a new message"""
        errors = validate_contact_message(data)
        if errors:
            raise FormValidationError(errors)

        phone = None
        if data.phone and data.phone.strip():
            phone = validate_phone_strict(data.phone).formatted

        subject = sanitize_text(data.subject, max_length=255)
        body = sanitize_text(data.message, max_length=MAX_MESSAGE_LENGTH)

        try:
            message = self.repo.create_message(
                self.db,
                name=sanitize_text(data.name, max_length=255),
                email=data.email.strip().lower(),
                phone=phone,
                message=f"Sujet: {subject}\n\n{body}",
                status="new",
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Contact message could not be saved: {e}")
            raise AppError("Erreur lors de l'envoi du message. Veuillez réessayer.") from e

        logger.info(f"Contact message {message.id} received")
        return message

    def get_messages(self) -> list[ContactMessage]:
        return self.repo.get_messages(self.db)

    def mark_as_read(self, message_id: str) -> ContactMessage:
        message = self._get(message_id)
        return self.repo.update_status(self.db, message, "read")

    def delete_message(self, message_id: str) -> dict:
        message = self._get(message_id)
        self.repo.delete_message(self.db, message)
        return {"message": "Message supprimé"}

    def _get(self, message_id: str) -> ContactMessage:
        message = self.repo.get_message(self.db, message_id)
        if not message:
            raise NotFoundError("Message introuvable")
        return message
