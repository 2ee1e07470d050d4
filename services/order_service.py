from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging

from domain.cart import Cart
from domain.models import Order, OrderItem, User
from domain.enums import OrderStatus, PaymentStatus, UserRole
from domain.order_workflow import (
    can_access_order,
    ensure_transition,
    is_cancellable,
    is_terminal,
)
from domain.schemas.limits import MAX_AMOUNT
from domain.schemas.order_schemas import OrderCreate, OrderFilter
from repositories import MealRepository, OrderRepository, UserRepository
from services.delivery_service import DeliveryService
from app.exceptions import NotFoundError, ForbiddenError, ServiceValidationError

logger = logging.getLogger("campusfood.orders")


class OrderService:
    """Order placement, listing and the status workflow"""

    @staticmethod
    def _load(db: Session, order_id: int) -> Order:
        order = OrderRepository(db).get_by_id(order_id)
        if not order:
            logger.warning(f"order_not_found order_id={order_id}")
            raise NotFoundError(f"Order {order_id} not found")
        return order

    @staticmethod
    def _refund_if_paid(order: Order) -> None:
        if order.payment is not None and order.payment.status == PaymentStatus.PAID:
            order.payment.status = PaymentStatus.REFUNDED
            logger.info(
                f"payment_refunded order_id={order.id} payment_id={order.payment.id}"
            )

    @staticmethod
    def build_cart(db: Session, payload: OrderCreate) -> Tuple[Cart, dict]:
        """
        Price the requested items from the catalog.

        Returns:
            Tuple of (cart, meals by id)

        Raises:
            ServiceValidationError: If any meal is unknown or unavailable
                or the order total does not fit the amount column
        """
        meal_ids = {item.meal_id for item in payload.items}
        meals = {meal.id: meal for meal in MealRepository(db).get_by_ids(list(meal_ids))}

        if len(meals) != len(meal_ids) or not all(m.is_available for m in meals.values()):
            missing = sorted(meal_ids - set(meals))
            logger.warning(f"order_rejected missing_or_unavailable meal_ids={missing}")
            raise ServiceValidationError("One or more meals not found or not available")

        cart = Cart()
        for item in payload.items:
            meal = meals[item.meal_id]
            cart.add_item(
                meal_id=meal.id,
                name=meal.name,
                price=meal.price,
                quantity=item.quantity,
                vendor_name=meal.vendor.name if meal.vendor else None,
                image_url=meal.image_url,
                special_instructions=item.special_instructions,
            )
        if cart.total > MAX_AMOUNT:
            logger.warning(f"order_rejected total_too_large total={cart.total}")
            raise ServiceValidationError(
                f"Order total exceeds the maximum of {MAX_AMOUNT}"
            )
        cart.set_delivery_details(payload.delivery_address, payload.delivery_notes)
        return cart, meals

    @staticmethod
    def create_order(db: Session, payload: OrderCreate, user: User) -> Order:
        """Place a PENDING order for the current customer."""
        if user.role != UserRole.CUSTOMER:
            raise ForbiddenError("Only customers can place orders")

        cart, meals = OrderService.build_cart(db, payload)

        order = Order(
            customer_id=user.id,
            status=OrderStatus.PENDING,
            total_amount=cart.total,
            delivery_address=cart.delivery_address or user.address,
            delivery_notes=cart.delivery_instructions or None,
        )
        for line in cart.items:
            order.items.append(
                OrderItem(
                    meal=meals[line.meal_id],
                    meal_name=line.name,
                    quantity=line.quantity,
                    unit_price=line.price,
                    special_instructions=line.special_instructions,
                )
            )
        db.add(order)
        DeliveryService.create_for_order(db, order)
        db.commit()

        logger.info(
            f"order_created order_id={order.id} customer_id={user.id} "
            f"items={cart.item_count} total={cart.total}"
        )
        return OrderService._load(db, order.id)

    @staticmethod
    def list_orders(
        db: Session,
        page: int,
        limit: int,
        filters: Optional[OrderFilter],
        user: User,
    ) -> Tuple[List[Order], int]:
        """All orders for admins; vendors only see orders for their own meals."""
        filters = filters or OrderFilter()
        if user.role == UserRole.VENDOR:
            if user.vendor_id is None:
                return [], 0
            filters = filters.model_copy(update={"vendor_id": user.vendor_id})
        return OrderRepository(db).list_page(page, limit, filters)

    @staticmethod
    def list_customer_orders(
        db: Session, user: User, page: int, limit: int
    ) -> Tuple[List[Order], int]:
        return OrderRepository(db).list_page(
            page, limit, OrderFilter(customer_id=user.id)
        )

    @staticmethod
    def list_agent_orders(
        db: Session, user: User, page: int, limit: int
    ) -> Tuple[List[Order], int]:
        return OrderRepository(db).list_page(
            page, limit, OrderFilter(delivery_agent_id=user.id)
        )

    @staticmethod
    def get_order(db: Session, order_id: int, user: User) -> Order:
        order = OrderService._load(db, order_id)
        if not can_access_order(order, user):
            raise ForbiddenError("You do not have access to this order")
        return order

    @staticmethod
    def update_status(
        db: Session, order_id: int, new_status: OrderStatus, user: User
    ) -> Order:
        """
        Move an order to `new_status` following the transition table.

        Raises:
            ForbiddenError: If the caller has no stake in the order
            ServiceValidationError: If the role may not make this transition
        """
        order = OrderService.get_order(db, order_id, user)
        previous = order.status
        ensure_transition(previous, new_status, user.role)

        order.status = new_status
        if new_status == OrderStatus.CANCELLED:
            OrderService._refund_if_paid(order)
        DeliveryService.sync_with_order_status(order)
        db.commit()

        logger.info(
            f"order_status_changed order_id={order_id} from={previous.value} "
            f"to={new_status.value} by_user={user.id} role={user.role.value}"
        )
        return OrderService._load(db, order_id)

    @staticmethod
    def assign_delivery_agent(db: Session, order_id: int, agent_id: int) -> Order:
        order = OrderService._load(db, order_id)
        agent = UserRepository(db).get_by_id_and_role(agent_id, UserRole.DELIVERY_AGENT)
        if not agent:
            raise NotFoundError(f"Delivery agent {agent_id} not found")
        if is_terminal(order.status):
            raise ServiceValidationError(
                f"Cannot assign a delivery agent to an order in {order.status.value} status"
            )

        order.delivery_agent_id = agent.id
        if order.status == OrderStatus.CONFIRMED:
            order.status = OrderStatus.PREPARING
        DeliveryService.assign_agent(db, order, agent)
        db.commit()

        logger.info(f"order_assigned order_id={order_id} agent_id={agent_id}")
        return OrderService._load(db, order_id)

    @staticmethod
    def cancel_order(db: Session, order_id: int, user: User) -> Order:
        order = OrderService._load(db, order_id)
        if user.role != UserRole.ADMIN and order.customer_id != user.id:
            raise ForbiddenError("You can only cancel your own orders")
        if not is_cancellable(order.status):
            raise ServiceValidationError(
                f"Cannot cancel order in {order.status.value} status"
            )

        order.status = OrderStatus.CANCELLED
        OrderService._refund_if_paid(order)
        DeliveryService.sync_with_order_status(order)
        db.commit()

        logger.info(f"order_cancelled order_id={order_id} by_user={user.id}")
        return OrderService._load(db, order_id)
