"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Customer


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def search_customers(db: Session, search: Optional[str] = None) -> list[Customer]:
        """Customers newest first, optionally matching name, email, phone or address"""
        query = db.query(Customer)

        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    (Customer.first_name + " " + Customer.last_name).ilike(pattern),
                    Customer.email.ilike(pattern),
                    Customer.phone.ilike(pattern),
                    Customer.address.ilike(pattern),
                )
            )

        return query.order_by(Customer.created_at.desc()).all()

    @staticmethod
    def get_customer(db: Session, customer_id: str) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.id == customer_id).first()

    @staticmethod
    def delete_customer(db: Session, customer: Customer) -> None:
        db.delete(customer)
        db.commit()
