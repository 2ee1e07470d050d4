"""
User account model.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    TIMESTAMP,
    ForeignKey,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base
from domain.enums import UserRole


class User(Base):
    """User account model"""

    __tablename__ = "app_user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    phone_number = Column(String(50))
    address = Column(Text)
    profile_image_url = Column(Text)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.CUSTOMER)
    # Vendor operated by a VENDOR-role account
    vendor_id = Column(Integer, ForeignKey("vendor.id", ondelete="SET NULL"))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    vendor = relationship("Vendor", back_populates="staff")
    orders = relationship(
        "Order",
        back_populates="customer",
        foreign_keys="Order.customer_id",
        cascade="all, delete-orphan",
    )
    assigned_orders = relationship(
        "Order",
        back_populates="delivery_agent",
        foreign_keys="Order.delivery_agent_id",
    )
    subscriptions = relationship(
        "Subscription", back_populates="subscriber", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
