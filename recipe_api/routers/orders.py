"""Order endpoints. Every route acts on the caller's own orders."""

from typing import List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_current_user, get_order_service
from ..models import User
from ..schemas.order import OrderCreate, OrderResponse, OrderUpdate
from ..services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.create(payload, user)


@router.get("", response_model=List[OrderResponse])
def list_orders(
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.list_orders(user)


@router.get("/current", response_model=OrderResponse)
def current_order(
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """The caller's newest pending order."""
    return service.current(user)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.get(order_id, user)


@router.patch("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.update(order_id, payload, user)


@router.delete("/{order_id}", response_model=OrderResponse)
def delete_order(
    order_id: int,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.delete(order_id, user)
