"""Booking administration service - Status, payments and dashboard"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import BOOKING_STATUSES, Booking
from ...shared.errors import AppError, InvalidStatusTransitionError, NotFoundError
from .repository import BookingAdminRepository

logger = logging.getLogger(__name__)

# Terminal statuses have no outgoing transitions
ALLOWED_TRANSITIONS = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}

PAYMENT_FLAGS = ("deposit_paid", "full_payment_paid")
PAYMENT_AMOUNTS = ("deposit_amount", "paid_amount")


def can_transition(current: str, target: str) -> bool:
    return current == target or target in ALLOWED_TRANSITIONS.get(current, set())


class BookingAdminService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingAdminRepository()

    def list_bookings(self, status: Optional[str] = None, search: Optional[str] = None) -> list[Booking]:
        if status == "all":
            status = None
        return self.repo.search_bookings(self.db, status, search)

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get_booking(self.db, booking_id)
        if not booking:
            raise NotFoundError("Réservation introuvable")
        return booking

    def update_status(self, booking_id: str, status: str) -> Booking:
        """Apply a status change allowed by ALLOWED_TRANSITIONS; same status is a no-op"""
        if status not in BOOKING_STATUSES:
            raise InvalidStatusTransitionError(f"Statut inconnu: {status}")

        booking = self.get_booking(booking_id)
        if booking.status == status:
            return booking

        if not can_transition(booking.status, status):
            logger.warning(f"Refused status change {booking.status} -> {status} on booking {booking_id}")
            raise InvalidStatusTransitionError(
                f"Impossible de passer une réservation de '{booking.status}' à '{status}'."
            )

        logger.info(f"Booking {booking_id}: {booking.status} -> {status}")
        return self._save(booking, status=status)

    def toggle_payment(self, booking_id: str, field: str) -> Booking:
        if field not in PAYMENT_FLAGS:
            raise NotFoundError(f"Champ de paiement inconnu: {field}")
        booking = self.get_booking(booking_id)
        return self._save(booking, **{field: not getattr(booking, field)})

    def set_amount(self, booking_id: str, field: str, amount: float) -> Booking:
        if field not in PAYMENT_AMOUNTS:
            raise NotFoundError(f"Montant inconnu: {field}")
        booking = self.get_booking(booking_id)
        return self._save(booking, **{field: amount})

    def get_dashboard(self) -> dict:
        stats = self.repo.get_stats(self.db)
        stats["recent_bookings"] = self.repo.get_recent_bookings(self.db)
        return stats

    def _save(self, booking: Booking, **updates) -> Booking:
        try:
            return self.repo.update_booking(self.db, booking, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Booking {booking.id} update failed: {e}")
            raise AppError("Erreur lors de la mise à jour") from e
