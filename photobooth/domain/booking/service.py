"""Booking service - Public booking submission workflow"""

import logging
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Customer, Product
from ...shared.errors import (
    FOREIGN_KEY_VIOLATION,
    UNIQUE_VIOLATION,
    BookingCreationError,
    CustomerCreationError,
    CustomerUpdateError,
    EmailAlreadyUsedError,
    FormValidationError,
    LookupFailedError,
    NotFoundError,
    ProductUnavailableError,
    SlotTakenError,
    classify_integrity_error,
)
from .forms import BookingForm, ContactStep, validate_form
from .pricing import calculate_total_price
from .repository import BookingRepository

logger = logging.getLogger(__name__)


@dataclass
class BookingConfirmation:
    """Summary shown once the booking is recorded"""

    booking_id: str
    status: str
    product_name: str
    event_date: date
    event_time: time
    duration: int
    total_price: float
    customer_name: str
    email: str


def parse_event_slot(form: BookingForm) -> tuple[date, time]:
    """Parse the selected date (YYYY-MM-DD) and time (HH:MM)"""
    errors = {}
    event_date = event_time = None
    try:
        event_date = date.fromisoformat(form.selection.date.strip())
    except ValueError:
        errors["date"] = "Veuillez sélectionner une date valide"
    try:
        event_time = time.fromisoformat(form.selection.time.strip())
    except ValueError:
        errors["time"] = "Veuillez sélectionner une heure valide"
    if errors:
        raise FormValidationError(errors)
    return event_date, event_time


class BookingService:
    """Service layer for the public booking flow"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    def list_available_products(self) -> list[Product]:
        return self.repo.list_available_products(self.db)

    def quote(self, product_id: str, duration: int) -> int:
        """Total price for a product and duration"""
        product = self.repo.get_product(self.db, product_id)
        if not product:
            raise NotFoundError("Photobooth introuvable")
        return calculate_total_price(product.price, duration)

    def submit(self, form: BookingForm) -> BookingConfirmation:
        """
        Record a booking from a completed form.

        Steps run strictly in order and each one commits on its own:
        customer lookup by email, customer update or insert, booking insert.
        Nothing is retried. A failure at the booking insert leaves the
        customer row created or updated.

        Raises:
            FormValidationError: the form is incomplete, nothing is written
            AppError subclass: the step that failed, already logged
        """
        result = validate_form(form)
        if not result.valid:
            raise FormValidationError(result.errors)
        event_date, event_time = parse_event_slot(form)

        contact = form.contact
        email = contact.email.strip()

        existing = self._find_customer(email)
        if existing:
            customer = self._update_customer(existing, contact)
        else:
            customer = self._create_customer(email, contact)

        product = self._find_product(form.selection.product)
        base_price = product.price if product else None
        total_price = calculate_total_price(base_price, form.selection.duration)

        if product is not None and not product.available:
            logger.warning(f"Booking rejected, product {product.id} is no longer available")
            raise ProductUnavailableError()

        booking = self._create_booking(
            customer_id=customer.id,
            product_id=form.selection.product,
            event_date=event_date,
            event_time=event_time,
            duration=form.selection.duration,
            address=contact.address.strip(),
            event_type=contact.event_type.strip(),
            guests_count=contact.guests_count,
            special_requests=contact.special_requests.strip() or None,
            total_price=total_price,
            status="pending",
            deposit_paid=False,
            full_payment_paid=False,
        )

        logger.info(f"Booking {booking.id} recorded for customer {customer.id} ({total_price})")

        return BookingConfirmation(
            booking_id=booking.id,
            status=booking.status,
            product_name=booking.product.name,
            event_date=booking.event_date,
            event_time=booking.event_time,
            duration=booking.duration,
            total_price=booking.total_price,
            customer_name=customer.full_name,
            email=customer.email,
        )

    def _find_customer(self, email: str) -> Optional[Customer]:
        try:
            return self.repo.find_customer_by_email(self.db, email)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Customer lookup failed: {e}")
            raise LookupFailedError() from e

    def _find_product(self, product_id: str) -> Optional[Product]:
        try:
            return self.repo.get_product(self.db, product_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Product lookup failed for {product_id}: {e}")
            raise LookupFailedError(
                "Erreur lors de la vérification du photobooth. Veuillez réessayer."
            ) from e

    def _update_customer(self, customer: Customer, contact: ContactStep) -> Customer:
        try:
            return self.repo.update_customer(
                self.db,
                customer,
                first_name=contact.first_name.strip(),
                last_name=contact.last_name.strip(),
                phone=contact.phone.strip(),
                address=contact.address.strip(),
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Customer {customer.id} update failed: {e}")
            raise CustomerUpdateError() from e

    def _create_customer(self, email: str, contact: ContactStep) -> Customer:
        try:
            return self.repo.insert_customer(
                self.db,
                first_name=contact.first_name.strip(),
                last_name=contact.last_name.strip(),
                email=email,
                phone=contact.phone.strip(),
                address=contact.address.strip(),
            )
        except IntegrityError as e:
            self.db.rollback()
            if classify_integrity_error(e) == UNIQUE_VIOLATION:
                # Another submission inserted the same email since the lookup
                logger.warning(f"Customer insert lost the race for {email}")
                raise EmailAlreadyUsedError() from e
            logger.error(f"Customer insert failed: {e}")
            raise CustomerCreationError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Customer insert failed: {e}")
            raise CustomerCreationError() from e

    def _create_booking(self, **fields):
        try:
            return self.repo.insert_booking(self.db, **fields)
        except IntegrityError as e:
            self.db.rollback()
            violation = classify_integrity_error(e)
            if violation == FOREIGN_KEY_VIOLATION:
                logger.warning(f"Booking insert referenced a missing product {fields['product_id']}")
                raise ProductUnavailableError() from e
            if violation == UNIQUE_VIOLATION:
                logger.warning(
                    f"Slot already booked: {fields['product_id']} "
                    f"{fields['event_date']} {fields['event_time']}"
                )
                raise SlotTakenError() from e
            logger.error(f"Booking insert failed: {e}")
            raise BookingCreationError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Booking insert failed: {e}")
            raise BookingCreationError() from e
