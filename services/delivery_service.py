from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4
from sqlalchemy.orm import Session
import logging

from domain.models import Delivery, Order, User
from domain.enums import DeliveryStatus, OrderStatus
from domain.order_workflow import can_access_order
from domain.schemas.order_schemas import (
    DeliveryEstimateRequest,
    DeliveryEstimateResponse,
)
from repositories import OrderRepository, DeliveryRepository
from app.config import settings
from app.exceptions import NotFoundError, ForbiddenError

logger = logging.getLogger("campusfood.delivery")

# Extra minutes added per batch of open orders, and the cap on the total
LOAD_STEP_ORDERS = 5
LOAD_STEP_MINUTES = 5
MAX_LOAD_MINUTES = 30

# Order status -> delivery status it drags along
STATUS_SYNC = {
    OrderStatus.OUT_FOR_DELIVERY: DeliveryStatus.IN_TRANSIT,
    OrderStatus.DELIVERED: DeliveryStatus.DELIVERED,
    OrderStatus.CANCELLED: DeliveryStatus.FAILED,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class DeliveryService:
    """Delivery records, estimates and tracking"""

    @staticmethod
    def load_minutes(open_orders: int) -> int:
        """Queue delay for the given number of open orders."""
        steps = max(open_orders, 0) // LOAD_STEP_ORDERS
        return min(steps * LOAD_STEP_MINUTES, MAX_LOAD_MINUTES)

    @staticmethod
    def estimate(
        db: Session, request: Optional[DeliveryEstimateRequest] = None
    ) -> DeliveryEstimateResponse:
        """
        Estimate the delivery window in minutes.

        The configured base window grows with the number of orders still in
        flight. The campus location does not change the estimate.
        """
        open_orders = OrderRepository(db).count_open()
        extra = DeliveryService.load_minutes(open_orders)
        estimate = DeliveryEstimateResponse(
            min_minutes=settings.delivery_base_min_minutes + extra,
            max_minutes=settings.delivery_base_max_minutes + extra,
        )
        logger.info(
            f"delivery_estimated open_orders={open_orders} "
            f"min={estimate.min_minutes} max={estimate.max_minutes}"
        )
        return estimate

    @staticmethod
    def create_for_order(db: Session, order: Order) -> Delivery:
        """Attach a PENDING delivery to a new order. The caller commits."""
        pickup = None
        for item in order.items:
            if item.meal is not None and item.meal.vendor is not None:
                pickup = item.meal.vendor.address
                break

        delivery = Delivery(
            status=DeliveryStatus.PENDING,
            pickup_location=pickup,
            delivery_location=order.delivery_address,
            estimated_delivery_time=_now()
            + timedelta(minutes=settings.delivery_base_max_minutes),
        )
        order.delivery = delivery
        db.add(delivery)
        return delivery

    @staticmethod
    def assign_agent(db: Session, order: Order, agent: User) -> Delivery:
        """Hand the order's delivery to `agent`. The caller commits."""
        delivery = order.delivery
        if delivery is None:
            delivery = DeliveryService.create_for_order(db, order)

        delivery.delivery_agent_id = agent.id
        delivery.status = DeliveryStatus.ASSIGNED
        if not delivery.tracking_number:
            delivery.tracking_number = f"TRK-{uuid4().hex[:12].upper()}"
        return delivery

    @staticmethod
    def sync_with_order_status(order: Order) -> None:
        delivery = order.delivery
        new_status = STATUS_SYNC.get(order.status)
        if delivery is None or new_status is None:
            return

        delivery.status = new_status
        if new_status == DeliveryStatus.DELIVERED:
            delivery.actual_delivery_time = _now()
        logger.info(
            f"delivery_synced order_id={order.id} status={new_status.value}"
        )

    @staticmethod
    def get_for_order(db: Session, order_id: int, user: User) -> Delivery:
        order = OrderRepository(db).get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order {order_id} not found")
        if not can_access_order(order, user):
            raise ForbiddenError("You do not have access to this order")

        delivery = DeliveryRepository(db).get_by_order_id(order_id)
        if not delivery:
            raise NotFoundError(f"No delivery found for order {order_id}")
        return delivery
