from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from domain.enums import OrderStatus, DeliveryStatus, PaymentStatus, PaymentMethod
from domain.schemas.user_schemas import UserSummary
from domain.schemas.catalog_schemas import MealSummary
from domain.schemas.limits import MAX_DB_ID, MAX_QUANTITY


# =============================================================================
# ORDERS
# =============================================================================


class OrderItemCreate(BaseModel):
    meal_id: int = Field(..., ge=1, le=MAX_DB_ID)
    quantity: int = Field(
        ..., ge=1, le=MAX_QUANTITY, description="Number of portions"
    )
    special_instructions: Optional[str] = Field(None, max_length=500)


class OrderCreate(BaseModel):
    items: List[OrderItemCreate] = Field(..., min_length=1)
    delivery_address: Optional[str] = None
    delivery_notes: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class AssignDeliveryAgentRequest(BaseModel):
    delivery_agent_id: int = Field(..., ge=1, le=MAX_DB_ID)


class OrderFilter(BaseModel):
    status: Optional[OrderStatus] = None
    customer_id: Optional[int] = None
    delivery_agent_id: Optional[int] = None
    vendor_id: Optional[int] = None


class OrderItemResponse(BaseModel):
    meal_id: Optional[int] = None
    meal_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Optional[Decimal] = None
    special_instructions: Optional[str] = None
    meal: Optional[MealSummary] = None

    model_config = {"from_attributes": True}


class PaymentSummary(BaseModel):
    id: int
    method: PaymentMethod
    status: PaymentStatus
    amount: Decimal
    transaction_id: Optional[str] = None

    model_config = {"from_attributes": True}


class DeliveryResponse(BaseModel):
    id: int
    order_id: int
    delivery_agent_id: Optional[int] = None
    tracking_number: Optional[str] = None
    status: DeliveryStatus
    pickup_location: Optional[str] = None
    delivery_location: Optional[str] = None
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: int
    status: OrderStatus
    total_amount: Decimal
    delivery_address: Optional[str] = None
    delivery_notes: Optional[str] = None
    customer: Optional[UserSummary] = None
    delivery_agent: Optional[UserSummary] = None
    items: List[OrderItemResponse] = []
    payment: Optional[PaymentSummary] = None
    delivery: Optional[DeliveryResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# =============================================================================
# PAYMENTS
# =============================================================================


class PaymentDetails(BaseModel):
    """Payment details as entered at checkout"""

    method: PaymentMethod
    card_number: Optional[str] = None
    expiry_date: Optional[str] = Field(None, description="MM/YY")
    cvv: Optional[str] = None
    cardholder_name: Optional[str] = None
    mobile_money_provider: Optional[str] = None
    mobile_money_number: Optional[str] = None


class PaymentValidationResponse(BaseModel):
    valid: bool
    message: Optional[str] = None


class ProcessPaymentRequest(BaseModel):
    order_id: int = Field(..., ge=1, le=MAX_DB_ID)
    details: PaymentDetails


class PaymentResponse(BaseModel):
    id: int
    order_id: int
    amount: Decimal
    status: PaymentStatus
    method: PaymentMethod
    transaction_id: Optional[str] = None
    payment_details: Optional[dict] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# =============================================================================
# DELIVERY
# =============================================================================


class DeliveryEstimateRequest(BaseModel):
    address: Optional[str] = None
    campus: Optional[str] = None
    building: Optional[str] = None
    room_number: Optional[str] = None
    delivery_time: Optional[str] = None


class DeliveryEstimateResponse(BaseModel):
    min_minutes: int
    max_minutes: int
