"""Product catalogue CRUD."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..database import unit_of_work
from ..errors import NotFoundError
from ..mappers import product_to_response
from ..models import Product
from ..pagination import create_paginated, page_offset
from ..schemas.common import Paginated
from ..schemas.product import ProductCreate, ProductResponse, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, product_id: int) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def create(self, payload: ProductCreate) -> ProductResponse:
        with unit_of_work(self.db):
            product = Product(**payload.model_dump())
            self.db.add(product)
            self.db.flush()
            response = product_to_response(product)

        logger.info(f"Created product id={response.id}")
        return response

    def list_products(self, page: int, page_size: int) -> Paginated[ProductResponse]:
        offset = page_offset(page, page_size)
        products = self.db.scalars(
            select(Product).order_by(Product.id).offset(offset).limit(page_size)
        ).all()
        total = self.db.scalar(select(func.count()).select_from(Product))
        return create_paginated(
            [product_to_response(p) for p in products], total, page, page_size
        )

    def get(self, product_id: int) -> ProductResponse:
        return product_to_response(self._get_or_404(product_id))

    def update(self, product_id: int, payload: ProductUpdate) -> ProductResponse:
        with unit_of_work(self.db):
            product = self._get_or_404(product_id)
            for field, value in payload.model_dump(exclude_unset=True).items():
                if value is None and field != "description":
                    continue
                setattr(product, field, value)
            self.db.flush()
            response = product_to_response(product)
        return response

    def delete(self, product_id: int) -> ProductResponse:
        with unit_of_work(self.db):
            product = self._get_or_404(product_id)
            response = product_to_response(product)
            self.db.delete(product)

        logger.info(f"Deleted product id={product_id}")
        return response
