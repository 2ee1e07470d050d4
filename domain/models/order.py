"""
Order, delivery, payment and subscription models.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    Numeric,
    TIMESTAMP,
    ForeignKey,
    Table,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base
from domain.enums import OrderStatus, DeliveryStatus, PaymentStatus, PaymentMethod


class Order(Base):
    """Customer order"""

    __tablename__ = "customer_order"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    status = Column(SQLEnum(OrderStatus), nullable=False, default=OrderStatus.PENDING)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    delivery_address = Column(Text)
    delivery_notes = Column(Text)
    delivery_agent_id = Column(
        Integer, ForeignKey("app_user.id", ondelete="SET NULL")
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    customer = relationship(
        "User", back_populates="orders", foreign_keys=[customer_id]
    )
    delivery_agent = relationship(
        "User", back_populates="assigned_orders", foreign_keys=[delivery_agent_id]
    )
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    payment = relationship(
        "Payment", back_populates="order", uselist=False, cascade="all, delete-orphan"
    )
    delivery = relationship(
        "Delivery", back_populates="order", uselist=False, cascade="all, delete-orphan"
    )


class OrderItem(Base):
    """Join table between orders and meals, with the line-item payload"""

    __tablename__ = "order_item"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer, ForeignKey("customer_order.id", ondelete="CASCADE"), nullable=False
    )
    meal_id = Column(Integer, ForeignKey("meal.id", ondelete="SET NULL"))
    meal_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    special_instructions = Column(Text)

    order = relationship("Order", back_populates="items")
    meal = relationship("Meal")


class Delivery(Base):
    """Delivery tracking for an order"""

    __tablename__ = "delivery"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("customer_order.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    delivery_agent_id = Column(Integer, ForeignKey("app_user.id", ondelete="SET NULL"))
    tracking_number = Column(String(64))
    status = Column(
        SQLEnum(DeliveryStatus), nullable=False, default=DeliveryStatus.PENDING
    )
    pickup_location = Column(Text)
    delivery_location = Column(Text)
    estimated_delivery_time = Column(TIMESTAMP(timezone=True))
    actual_delivery_time = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    order = relationship("Order", back_populates="delivery")
    delivery_agent = relationship("User")


class Payment(Base):
    """Payment for an order"""

    __tablename__ = "payment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("customer_order.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        SQLEnum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING
    )
    method = Column(
        SQLEnum(PaymentMethod), nullable=False, default=PaymentMethod.MOBILE_MONEY
    )
    transaction_id = Column(String(64))
    payment_details = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    order = relationship("Order", back_populates="payment")


subscription_meal = Table(
    "subscription_meal",
    Base.metadata,
    Column(
        "subscription_id",
        Integer,
        ForeignKey("subscription.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "meal_id", Integer, ForeignKey("meal.id", ondelete="CASCADE"), primary_key=True
    ),
)


class Subscription(Base):
    """Recurring meal plan subscription"""

    __tablename__ = "subscription"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subscriber_id = Column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    plan_name = Column(String(255), nullable=False)
    monthly_fee = Column(Numeric(10, 2), nullable=False)
    meals_per_week = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    start_date = Column(TIMESTAMP(timezone=True), nullable=False)
    end_date = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    subscriber = relationship("User", back_populates="subscriptions")
    included_meals = relationship("Meal", secondary=subscription_meal)
