"""Product catalogue model."""

import enum

from sqlalchemy import Enum, Float, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class ProductCategory(str, enum.Enum):
    """Catalogue section of a product."""

    ELECTRONICS = "ELECTRONICS"
    CLOTHING = "CLOTHING"
    HOME = "HOME"
    BEAUTY = "BEAUTY"


class Product(Base, TimestampMixin):
    """Model for storing products that can be ordered."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    category: Mapped[ProductCategory] = mapped_column(Enum(ProductCategory), nullable=False)
    images: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}')>"
