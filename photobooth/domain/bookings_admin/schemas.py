"""Booking administration schemas"""

from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import Booking


class StatusUpdate(BaseModel):
    status: str


class AmountUpdate(BaseModel):
    amount: float

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        if v < 0:
            raise ValueError("Amount must be a non-negative number")
        return v


class BookingAdminResponse(BaseModel):
    id: str
    customerId: str
    customerName: str
    customerEmail: str
    customerPhone: str
    productId: str
    productName: str
    eventDate: date
    eventTime: time
    duration: int
    address: str
    eventType: str
    guestsCount: Optional[int] = None
    specialRequests: Optional[str] = None
    totalPrice: float
    status: str
    depositPaid: bool
    fullPaymentPaid: bool
    depositAmount: float
    paidAmount: float
    createdAt: datetime

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingAdminResponse":
        return cls(
            id=booking.id,
            customerId=booking.customer_id,
            customerName=booking.customer.full_name,
            customerEmail=booking.customer.email,
            customerPhone=booking.customer.phone,
            productId=booking.product_id,
            productName=booking.product.name,
            eventDate=booking.event_date,
            eventTime=booking.event_time,
            duration=booking.duration,
            address=booking.address,
            eventType=booking.event_type,
            guestsCount=booking.guests_count,
            specialRequests=booking.special_requests,
            totalPrice=booking.total_price,
            status=booking.status,
            depositPaid=booking.deposit_paid,
            fullPaymentPaid=booking.full_payment_paid,
            depositAmount=booking.deposit_amount,
            paidAmount=booking.paid_amount,
            createdAt=booking.created_at,
        )


class DashboardResponse(BaseModel):
    totalBookings: int
    pendingBookings: int
    revenue: float
    totalCustomers: int
    newMessages: int
    recentBookings: list[BookingAdminResponse]
