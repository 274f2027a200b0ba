"""Booking repository - Store operations used by the public booking flow"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Booking, Customer, Product


class BookingRepository:
    """Repository for the customer upsert and booking insert"""

    @staticmethod
    def list_available_products(db: Session) -> list[Product]:
        """Products open for booking, cheapest first"""
        return (
            db.query(Product)
            .filter(Product.available.is_(True))
            .order_by(Product.price.asc(), Product.name.asc())
            .all()
        )

    @staticmethod
    def get_product(db: Session, product_id: str) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    def find_customer_by_email(db: Session, email: str) -> Optional[Customer]:
        """Exact, case-sensitive match on the stored email"""
        return db.query(Customer).filter(Customer.email == email).first()

    @staticmethod
    def update_customer(db: Session, customer: Customer, **fields) -> Customer:
        """Overwrite the given fields"""
        for key, value in fields.items():
            setattr(customer, key, value)
        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def insert_customer(db: Session, **fields) -> Customer:
        customer = Customer(**fields)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def insert_booking(db: Session, **fields) -> Booking:
        booking = Booking(**fields)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking
