"""Booking administration repository"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models import Booking, ContactMessage, Customer, Product


class BookingAdminRepository:
    @staticmethod
    def search_bookings(
        db: Session, status: Optional[str] = None, search: Optional[str] = None
    ) -> list[Booking]:
        """Bookings newest first, optionally filtered by status and free text"""
        query = db.query(Booking).join(Booking.customer).join(Booking.product)

        if status:
            query = query.filter(Booking.status == status)

        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    (Customer.first_name + " " + Customer.last_name).ilike(pattern),
                    Customer.email.ilike(pattern),
                    Product.name.ilike(pattern),
                )
            )

        return query.order_by(Booking.created_at.desc()).all()

    @staticmethod
    def get_booking(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def update_booking(db: Session, booking: Booking, **updates) -> Booking:
        for key, value in updates.items():
            setattr(booking, key, value)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def get_stats(db: Session) -> dict:
        total_bookings = db.query(func.count(Booking.id)).scalar()
        pending_bookings = (
            db.query(func.count(Booking.id)).filter(Booking.status == "pending").scalar()
        )
        revenue = (
            db.query(func.coalesce(func.sum(Booking.total_price), 0))
            .filter(Booking.status != "cancelled")
            .scalar()
        )
        total_customers = db.query(func.count(Customer.id)).scalar()
        new_messages = (
            db.query(func.count(ContactMessage.id)).filter(ContactMessage.status == "new").scalar()
        )
        return {
            "total_bookings": total_bookings or 0,
            "pending_bookings": pending_bookings or 0,
            "revenue": float(revenue or 0),
            "total_customers": total_customers or 0,
            "new_messages": new_messages or 0,
        }

    @staticmethod
    def get_recent_bookings(db: Session, limit: int = 5) -> list[Booking]:
        return db.query(Booking).order_by(Booking.created_at.desc()).limit(limit).all()
