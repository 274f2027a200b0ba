"""Customer service - Back-office customer listing, export and deletion"""

import csv
import logging
from datetime import datetime
from io import StringIO
from typing import Optional

from fastapi.responses import StreamingResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Customer
from ...shared.errors import (
    FOREIGN_KEY_VIOLATION,
    AppError,
    CustomerHasBookingsError,
    NotFoundError,
    classify_integrity_error,
)
from .repository import CustomerRepository

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Prénom", "Nom", "Email", "Téléphone", "Adresse", "Date de création"]


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository()

    def get_customers(self, search: Optional[str] = None) -> list[Customer]:
        return self.repo.search_customers(self.db, search)

    def export_customers_csv(self, search: Optional[str] = None) -> StreamingResponse:
        """Export the (optionally filtered) customer list as CSV"""
        customers = self.repo.search_customers(self.db, search)

        output = StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL)
        writer.writerow(CSV_HEADERS)
        for customer in customers:
            writer.writerow(
                [
                    customer.first_name,
                    customer.last_name,
                    customer.email,
                    customer.phone or "",
                    customer.address or "",
                    customer.created_at.strftime("%d/%m/%Y") if customer.created_at else "",
                ]
            )

        filename = f"clients_{datetime.now().strftime('%Y-%m-%d')}.csv"
        logger.info(f"CSV export: {filename} ({len(customers)} customers)")

        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv; charset=utf-8",
            headers={
                "Content-Disposition": f"attachment; filename={filename}",
                "Cache-Control": "no-cache",
            },
        )

    def delete_customer(self, customer_id: str) -> dict:
        """Delete a customer; the store refuses while bookings reference it"""
        customer = self.repo.get_customer(self.db, customer_id)
        if not customer:
            raise NotFoundError("Client introuvable")

        try:
            self.repo.delete_customer(self.db, customer)
        except IntegrityError as e:
            self.db.rollback()
            if classify_integrity_error(e) == FOREIGN_KEY_VIOLATION:
                logger.warning(f"Customer {customer_id} still has bookings, not deleted")
                raise CustomerHasBookingsError() from e
            logger.error(f"Customer {customer_id} deletion failed: {e}")
            raise AppError("Erreur lors de la suppression du client") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Customer {customer_id} deletion failed: {e}")
            raise AppError("Erreur lors de la suppression du client") from e

        return {"message": "Client supprimé"}
