"""Catalog service - Back-office product management"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Product
from ...shared.errors import AppError, NotFoundError
from .repository import ProductRepository
from .schemas import ProductUpdate, parse_features

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository()

    def get_products(self) -> list[Product]:
        return self.repo.get_products(self.db)

    def get_product(self, product_id: str) -> Product:
        product = self.repo.get_product(self.db, product_id)
        if not product:
            raise NotFoundError("Photobooth introuvable")
        return product

    def toggle_availability(self, product_id: str) -> Product:
        product = self.get_product(product_id)
        logger.info(f"Product {product_id} available -> {not product.available}")
        return self._save(product, available=not product.available)

    def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        product = self.get_product(product_id)

        updates = data.model_dump(exclude_none=True, exclude={"features"})
        if data.features is not None:
            updates["features"] = parse_features(data.features)

        return self._save(product, **updates)

    def _save(self, product: Product, **updates) -> Product:
        try:
            return self.repo.update_product(self.db, product, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Product {product.id} update failed: {e}")
            raise AppError("Erreur lors de la mise à jour du produit") from e
