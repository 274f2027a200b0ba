"""Booking router - Public catalog and booking endpoints"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.errors import FormValidationError, NotFoundError
from .forms import FORM_STEPS, validate_step
from .pricing import ALLOWED_DURATIONS, DEFAULT_DURATION
from .schemas import (
    BookingConfirmationResponse,
    BookingRequest,
    ProductResponse,
    QuoteResponse,
    StepValidationResponse,
)
from .service import BookingService
from .wizard import BookingWizard

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Booking"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.get("/products", response_model=list[ProductResponse])
async def list_products(service: BookingService = Depends(get_booking_service)):
    """Products open for booking, cheapest first"""
    return service.list_available_products()


@router.post("/bookings/steps/{step}/validate", response_model=StepValidationResponse)
async def validate_booking_step(step: str, data: BookingRequest):
    """Validate one step of the booking form without touching the store"""
    if step not in FORM_STEPS:
        raise NotFoundError(f"Étape inconnue: {step}")
    result = validate_step(step, data.to_form())
    return StepValidationResponse(valid=result.valid, errors=result.errors)


@router.get("/bookings/quote", response_model=QuoteResponse)
async def quote_booking(
    product_id: str = Query(...),
    duration: int = Query(DEFAULT_DURATION),
    service: BookingService = Depends(get_booking_service),
):
    if duration not in ALLOWED_DURATIONS:
        raise FormValidationError({"duration": "Durée non disponible"})
    total = service.quote(product_id, duration)
    return QuoteResponse(productId=product_id, duration=duration, totalPrice=total)


@router.post("/bookings", response_model=BookingConfirmationResponse, status_code=201)
async def create_booking(
    data: BookingRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Run the booking form through to confirmation"""
    wizard = BookingWizard(service.submit, data.to_form())

    result = wizard.advance()
    if not result.valid:
        raise FormValidationError(result.errors)

    confirmation = wizard.submit()
    if confirmation is None:
        raise FormValidationError(wizard.errors)

    return BookingConfirmationResponse(
        id=confirmation.booking_id,
        status=confirmation.status,
        productName=confirmation.product_name,
        eventDate=confirmation.event_date,
        eventTime=confirmation.event_time,
        duration=confirmation.duration,
        totalPrice=confirmation.total_price,
        customerName=confirmation.customer_name,
        email=confirmation.email,
    )
