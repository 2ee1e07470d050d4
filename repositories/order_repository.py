"""
Order Repository - Data access for orders and their line items, payments and deliveries
"""

from typing import Optional, List, Tuple
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Order, OrderItem, Meal, Payment, Delivery
from domain.enums import OrderStatus
from domain.schemas.order_schemas import OrderFilter


class OrderRepository(BaseRepository[Order]):
    """Repository for order data access"""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def _query(self):
        return self.db.query(Order).options(
            selectinload(Order.items).selectinload(OrderItem.meal),
            selectinload(Order.customer),
            selectinload(Order.delivery_agent),
            selectinload(Order.payment),
            selectinload(Order.delivery),
        )

    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get order with items, parties, payment and delivery loaded"""
        return self._query().filter(Order.id == order_id).first()

    def list_page(
        self, page: int, limit: int, filters: Optional[OrderFilter] = None
    ) -> Tuple[List[Order], int]:
        """Orders newest first, narrowed by the optional filters"""
        query = self._query()

        if filters:
            if filters.status is not None:
                query = query.filter(Order.status == filters.status)
            if filters.customer_id is not None:
                query = query.filter(Order.customer_id == filters.customer_id)
            if filters.delivery_agent_id is not None:
                query = query.filter(
                    Order.delivery_agent_id == filters.delivery_agent_id
                )
            if filters.vendor_id is not None:
                query = query.filter(
                    Order.items.any(
                        OrderItem.meal.has(Meal.vendor_id == filters.vendor_id)
                    )
                )

        query = query.order_by(Order.created_at.desc(), Order.id.desc())
        return self.paginate(query, page, limit)

    def count_open(self) -> int:
        """Orders not yet delivered or cancelled"""
        return (
            self.db.query(Order)
            .filter(Order.status.notin_([OrderStatus.DELIVERED, OrderStatus.CANCELLED]))
            .count()
        )


class PaymentRepository(BaseRepository[Payment]):
    """Repository for payment data access"""

    def __init__(self, db: Session):
        super().__init__(db, Payment)

    def get_by_order_id(self, order_id: int) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.order_id == order_id).first()


class DeliveryRepository(BaseRepository[Delivery]):
    """Repository for delivery data access"""

    def __init__(self, db: Session):
        super().__init__(db, Delivery)

    def get_by_order_id(self, order_id: int) -> Optional[Delivery]:
        return self.db.query(Delivery).filter(Delivery.order_id == order_id).first()
