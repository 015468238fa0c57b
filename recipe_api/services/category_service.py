"""Category CRUD."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..database import unit_of_work
from ..errors import ConflictError, NotFoundError
from ..mappers import category_to_response
from ..models import Category
from ..schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, category_id: int) -> Category:
        category = self.db.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def _check_name_free(self, name: str, category_id: int | None = None) -> None:
        existing = self.db.scalar(select(Category).where(Category.name == name))
        if existing is not None and existing.id != category_id:
            raise ConflictError(f"Category '{name}' already exists")

    def create(self, payload: CategoryCreate) -> CategoryResponse:
        with unit_of_work(self.db):
            self._check_name_free(payload.name)
            category = Category(**payload.model_dump())
            self.db.add(category)
            self.db.flush()
            response = category_to_response(category)

        logger.info(f"Created category id={response.id} name='{response.name}'")
        return response

    def list_categories(self) -> list[CategoryResponse]:
        categories = self.db.scalars(select(Category).order_by(Category.name)).all()
        return [category_to_response(c) for c in categories]

    def get(self, category_id: int) -> CategoryResponse:
        return category_to_response(self._get_or_404(category_id))

    def update(self, category_id: int, payload: CategoryUpdate) -> CategoryResponse:
        with unit_of_work(self.db):
            category = self._get_or_404(category_id)
            changes = payload.model_dump(exclude_unset=True)
            if changes.get("name") is not None:
                self._check_name_free(changes["name"], category.id)
            elif "name" in changes:
                del changes["name"]
            for field, value in changes.items():
                setattr(category, field, value)
            self.db.flush()
            response = category_to_response(category)
        return response

    def delete(self, category_id: int) -> CategoryResponse:
        with unit_of_work(self.db):
            category = self._get_or_404(category_id)
            response = category_to_response(category)
            self.db.delete(category)

        logger.info(f"Deleted category id={category_id}")
        return response
