"""Request and response schemas for products."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..models import ProductCategory
from .common import CamelModel


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    category: ProductCategory
    images: List[str] = Field(default_factory=list)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    category: Optional[ProductCategory] = None
    images: Optional[List[str]] = None


class ProductResponse(CamelModel):
    id: int
    name: str
    description: str
    price: float
    stock: int
    category: ProductCategory
    images: List[str]
    created_at: datetime
    updated_at: datetime
