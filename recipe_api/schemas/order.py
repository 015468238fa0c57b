"""Request and response schemas for orders."""

from datetime import datetime
from typing import List

from pydantic import Field

from ..models import OrderStatus
from .common import CamelModel


class OrderItemInput(CamelModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class OrderCreate(CamelModel):
    items: List[OrderItemInput] = Field(..., min_length=1)


class OrderUpdate(CamelModel):
    status: OrderStatus


class OrderItemResponse(CamelModel):
    id: int
    product_id: int
    quantity: int
    price: float


class OrderResponse(CamelModel):
    id: int
    user_id: int
    total_amount: float
    status: OrderStatus
    items: List[OrderItemResponse]
    created_at: datetime
    updated_at: datetime
