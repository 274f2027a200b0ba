"""Customer router - Back-office customer endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_staff
from ...database import get_db
from ...models import UserProfile
from .schemas import CustomerResponse
from .service import CustomerService

router = APIRouter(prefix="/admin/customers", tags=["Admin - Customers"])


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db)


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    search: Optional[str] = Query(None),
    current_staff: UserProfile = Depends(get_current_staff),
    service: CustomerService = Depends(get_customer_service),
):
    return service.get_customers(search)


@router.get("/export")
async def export_customers_csv(
    search: Optional[str] = Query(None),
    current_staff: UserProfile = Depends(get_current_staff),
    service: CustomerService = Depends(get_customer_service),
):
    """Export customers as CSV, with the same search filter as the list"""
    return service.export_customers_csv(search)


@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: CustomerService = Depends(get_customer_service),
):
    return service.delete_customer(customer_id)
