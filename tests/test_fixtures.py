"""
Shared test fixtures and utilities for the CampusFood test suite.

Contains the test client, a real database session fixture and factory helpers
that write users, vendors, meals and orders straight to the test database.
"""

import uuid
from decimal import Decimal
from typing import Generator, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from main import app
from app.security import create_access_token, hash_password
from domain.enums import OrderStatus, UserRole
from domain.models import Meal, Order, SessionLocal, User, Vendor
from domain.schemas.order_schemas import OrderCreate, OrderItemCreate
from services.order_service import OrderService

# Lifespan is not entered; tables come from the autouse fixture in conftest
client = TestClient(app)

DEFAULT_PASSWORD = "secret123"


def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """
    Real session on the in-memory test database.

    Yields:
        Session: SQLAlchemy database session
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def make_user(
    db: Session,
    role: UserRole = UserRole.CUSTOMER,
    email: Optional[str] = None,
    name: str = "Amina Ngono",
    password: str = DEFAULT_PASSWORD,
    vendor: Optional[Vendor] = None,
    address: Optional[str] = "Mini-cité Bonamoussadi, Room 12",
) -> User:
    user = User(
        name=name,
        email=email or unique_email(role.value.lower()),
        password_hash=hash_password(password),
        phone_number="237650000000",
        address=address,
        role=role,
        vendor_id=vendor.id if vendor else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_vendor(
    db: Session,
    name: str = "Mama Africa Kitchen",
    email: Optional[str] = None,
    is_active: bool = True,
    description: str = "Authentic Cameroonian cuisine",
) -> Vendor:
    vendor = Vendor(
        name=name,
        address="University Campus, Building A",
        email=email,
        description=description,
        is_active=is_active,
    )
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    return vendor


def make_meal(
    db: Session,
    vendor: Vendor,
    name: str = "Ndolé",
    price: str = "3500",
    category: str = "Traditional",
    is_available: bool = True,
    is_featured: bool = False,
    description: str = "Stewed nuts with bitter leaves",
) -> Meal:
    meal = Meal(
        name=name,
        description=description,
        price=Decimal(price),
        category=category,
        is_available=is_available,
        is_featured=is_featured,
        vendor_id=vendor.id,
    )
    db.add(meal)
    db.commit()
    db.refresh(meal)
    return meal


def make_order(
    db: Session,
    customer: User,
    lines: List[Tuple[Meal, int]],
    status: OrderStatus = OrderStatus.PENDING,
    delivery_address: str = "Block C, Room 4",
) -> Order:
    """Place an order through the service, then force it into `status`."""
    payload = OrderCreate(
        items=[OrderItemCreate(meal_id=meal.id, quantity=qty) for meal, qty in lines],
        delivery_address=delivery_address,
    )
    order = OrderService.create_order(db, payload, customer)
    if status != OrderStatus.PENDING:
        order.status = status
        db.commit()
        db.refresh(order)
    return order


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


def catalog(db: Session) -> Tuple[Vendor, Meal, Meal]:
    """One vendor with two meals (3500 and 4200)."""
    vendor = make_vendor(db)
    ndole = make_meal(db, vendor, name="Ndolé", price="3500")
    poulet = make_meal(db, vendor, name="Poulet DG", price="4200")
    return vendor, ndole, poulet
