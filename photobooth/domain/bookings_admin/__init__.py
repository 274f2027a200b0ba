"""Bookings administration domain - Status workflow, payments and dashboard"""

from .router import router

__all__ = ["router"]
