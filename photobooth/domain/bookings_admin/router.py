"""Booking administration router"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_staff
from ...database import get_db
from ...models import UserProfile
from .schemas import AmountUpdate, BookingAdminResponse, DashboardResponse, StatusUpdate
from .service import BookingAdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin - Bookings"])


def get_booking_admin_service(db: Session = Depends(get_db)) -> BookingAdminService:
    """Dependency injection for BookingAdminService"""
    return BookingAdminService(db)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    current_staff: UserProfile = Depends(get_current_staff),
    service: BookingAdminService = Depends(get_booking_admin_service),
):
    stats = service.get_dashboard()
    return DashboardResponse(
        totalBookings=stats["total_bookings"],
        pendingBookings=stats["pending_bookings"],
        revenue=stats["revenue"],
        totalCustomers=stats["total_customers"],
        newMessages=stats["new_messages"],
        recentBookings=[BookingAdminResponse.from_booking(b) for b in stats["recent_bookings"]],
    )


@router.get("/bookings", response_model=list[BookingAdminResponse])
async def list_bookings(
    status: Optional[str] = Query(None, description="Booking status, or 'all'"),
    search: Optional[str] = Query(None),
    current_staff: UserProfile = Depends(get_current_staff),
    service: BookingAdminService = Depends(get_booking_admin_service),
):
    """All bookings, newest first"""
    return [BookingAdminResponse.from_booking(b) for b in service.list_bookings(status, search)]


@router.get("/bookings/{booking_id}", response_model=BookingAdminResponse)
async def get_booking(
    booking_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: BookingAdminService = Depends(get_booking_admin_service),
):
    return BookingAdminResponse.from_booking(service.get_booking(booking_id))


@router.patch("/bookings/{booking_id}/status", response_model=BookingAdminResponse)
async def update_booking_status(
    booking_id: str,
    data: StatusUpdate,
    current_staff: UserProfile = Depends(get_current_staff),
    service: BookingAdminService = Depends(get_booking_admin_service),
):
    booking = service.update_status(booking_id, data.status)
    return BookingAdminResponse.from_booking(booking)


@router.post("/bookings/{booking_id}/payments/{field}/toggle", response_model=BookingAdminResponse)
async def toggle_booking_payment(
    booking_id: str,
    field: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: BookingAdminService = Depends(get_booking_admin_service),
):
    """Flip deposit_paid or full_payment_paid"""
    return BookingAdminResponse.from_booking(service.toggle_payment(booking_id, field))


@router.put("/bookings/{booking_id}/amounts/{field}", response_model=BookingAdminResponse)
async def set_booking_amount(
    booking_id: str,
    field: str,
    data: AmountUpdate,
    current_staff: UserProfile = Depends(get_current_staff),
    service: BookingAdminService = Depends(get_booking_admin_service),
):
    """Set deposit_amount or paid_amount"""
    return BookingAdminResponse.from_booking(service.set_amount(booking_id, field, data.amount))
