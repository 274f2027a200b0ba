"""Catalog repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Product


class ProductRepository:
    @staticmethod
    def get_products(db: Session) -> list[Product]:
        return db.query(Product).order_by(Product.created_at.desc()).all()

    @staticmethod
    def get_product(db: Session, product_id: str) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    def update_product(db: Session, product: Product, **updates) -> Product:
        """Update a product with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(product, key):
                setattr(product, key, value)
        db.commit()
        db.refresh(product)
        return product
