"""Gallery domain - Public gallery, image uploads and tags"""

from .router import router

__all__ = ["router"]
