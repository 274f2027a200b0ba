"""Booking domain - Public catalog, price quotes and the booking form"""

from .router import router

__all__ = ["router"]
