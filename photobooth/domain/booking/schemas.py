"""Booking domain schemas - Pydantic models for the public booking flow"""

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, field_validator

from .forms import BookingForm, ContactStep, SelectionStep
from .pricing import ALLOWED_DURATIONS, DEFAULT_DURATION


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    image_url: str
    price: float
    category: str
    features: list[str]
    available: bool

    class Config:
        from_attributes = True


class BookingRequest(BaseModel):
    """Booking form as posted by the site; field checks happen in the form validator"""

    productId: str = ""
    date: str = ""
    time: str = ""
    duration: int = DEFAULT_DURATION
    firstName: str = ""
    lastName: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    eventType: str = ""
    guestsCount: Optional[int] = None
    specialRequests: str = ""

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        if v not in ALLOWED_DURATIONS:
            allowed = ", ".join(str(d) for d in ALLOWED_DURATIONS)
            raise ValueError(f"Duration must be one of {allowed} hours")
        return v

    @field_validator("guestsCount")
    @classmethod
    def validate_guests_count(cls, v):
        if v is not None and v < 1:
            raise ValueError("Guests count must be positive")
        return v

    def to_form(self) -> BookingForm:
        return BookingForm(
            selection=SelectionStep(
                product=self.productId,
                date=self.date,
                time=self.time,
                duration=self.duration,
            ),
            contact=ContactStep(
                first_name=self.firstName,
                last_name=self.lastName,
                email=self.email,
                phone=self.phone,
                address=self.address,
                event_type=self.eventType,
                guests_count=self.guestsCount,
                special_requests=self.specialRequests,
            ),
        )


class StepValidationResponse(BaseModel):
    valid: bool
    errors: dict[str, str]


class QuoteResponse(BaseModel):
    productId: str
    duration: int
    totalPrice: int


class BookingConfirmationResponse(BaseModel):
    id: str
    status: str
    productName: str
    eventDate: date
    eventTime: time
    duration: int
    totalPrice: float
    customerName: str
    email: str
