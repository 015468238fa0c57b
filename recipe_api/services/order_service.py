"""Orders placed by users against the product catalogue."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..database import unit_of_work
from ..errors import NotFoundError, ValidationFailedError
from ..mappers import order_to_response
from ..models import Order, OrderItem, OrderStatus, Product, User
from ..schemas.order import OrderCreate, OrderResponse, OrderUpdate

logger = logging.getLogger(__name__)


class OrderService:
    """Order operations scoped to the requesting user."""

    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, order_id: int, user: User) -> Order:
        order = self.db.scalar(
            select(Order)
            .where(Order.id == order_id, Order.user_id == user.id)
            .options(selectinload(Order.items))
        )
        if order is None:
            raise NotFoundError("Order not found")
        return order

    def create(self, payload: OrderCreate, user: User) -> OrderResponse:
        """Place an order; prices are copied from the products and stock is reserved."""
        with unit_of_work(self.db):
            product_ids = {item.product_id for item in payload.items}
            products = {
                p.id: p
                for p in self.db.scalars(select(Product).where(Product.id.in_(product_ids)))
            }
            missing = product_ids - products.keys()
            if missing:
                raise ValidationFailedError(
                    f"Unknown products: {', '.join(str(i) for i in sorted(missing))}"
                )

            order = Order(user_id=user.id, total_amount=0, status=OrderStatus.PENDING)
            total = 0.0
            for item in payload.items:
                product = products[item.product_id]
                if product.stock < item.quantity:
                    raise ValidationFailedError(
                        f"Insufficient stock for product {product.id}"
                    )
                product.stock -= item.quantity
                total += product.price * item.quantity
                order.items.append(
                    OrderItem(product_id=product.id, quantity=item.quantity, price=product.price)
                )
            order.total_amount = round(total, 2)
            self.db.add(order)
            self.db.flush()
            response = order_to_response(order)

        logger.info(f"Created order id={response.id} for user id={user.id}")
        return response

    def list_orders(self, user: User) -> list[OrderResponse]:
        orders = self.db.scalars(
            select(Order)
            .where(Order.user_id == user.id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .options(selectinload(Order.items))
        ).all()
        return [order_to_response(o) for o in orders]

    def current(self, user: User) -> OrderResponse:
        """The user's newest pending order."""
        order = self.db.scalar(
            select(Order)
            .where(Order.user_id == user.id, Order.status == OrderStatus.PENDING)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(1)
            .options(selectinload(Order.items))
        )
        if order is None:
            raise NotFoundError("Order not found")
        return order_to_response(order)

    def get(self, order_id: int, user: User) -> OrderResponse:
        return order_to_response(self._get_or_404(order_id, user))

    def update(self, order_id: int, payload: OrderUpdate, user: User) -> OrderResponse:
        with unit_of_work(self.db):
            order = self._get_or_404(order_id, user)
            order.status = payload.status
            self.db.flush()
            response = order_to_response(order)

        logger.info(f"Order id={order_id} set to {payload.status.value}")
        return response

    def delete(self, order_id: int, user: User) -> OrderResponse:
        with unit_of_work(self.db):
            order = self._get_or_404(order_id, user)
            response = order_to_response(order)
            self.db.delete(order)

        logger.info(f"Deleted order id={order_id}")
        return response
