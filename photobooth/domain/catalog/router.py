"""Catalog router - Back-office product endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_staff
from ...database import get_db
from ...models import UserProfile
from .schemas import ProductAdminResponse, ProductUpdate
from .service import CatalogService

router = APIRouter(prefix="/admin/products", tags=["Admin - Products"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=list[ProductAdminResponse])
async def list_products(
    current_staff: UserProfile = Depends(get_current_staff),
    service: CatalogService = Depends(get_catalog_service),
):
    """All products including unavailable ones, newest first"""
    return service.get_products()


@router.post("/{product_id}/toggle-availability", response_model=ProductAdminResponse)
async def toggle_product_availability(
    product_id: str,
    current_staff: UserProfile = Depends(get_current_staff),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.toggle_availability(product_id)


@router.patch("/{product_id}", response_model=ProductAdminResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    current_staff: UserProfile = Depends(get_current_staff),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_product(product_id, data)
