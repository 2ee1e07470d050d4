"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.user_schemas import (
    UserResponse,
    UserSummary,
    RegisterRequest,
    LoginRequest,
    ResetPasswordRequest,
    ChangePasswordWithTokenRequest,
    AuthResponse,
    MessageResponse,
    UserUpdate,
    UserRoleUpdate,
    ChangePasswordRequest,
)
from domain.schemas.catalog_schemas import (
    VendorCreate,
    VendorUpdate,
    VendorActivationUpdate,
    VendorResponse,
    VendorSummary,
    VendorWithMealsResponse,
    MealCreate,
    MealUpdate,
    MealAvailabilityUpdate,
    MealFilter,
    MealResponse,
    MealSummary,
)
from domain.schemas.order_schemas import (
    OrderItemCreate,
    OrderCreate,
    OrderStatusUpdate,
    AssignDeliveryAgentRequest,
    OrderFilter,
    OrderItemResponse,
    OrderResponse,
    PaymentSummary,
    PaymentDetails,
    PaymentValidationResponse,
    ProcessPaymentRequest,
    PaymentResponse,
    DeliveryResponse,
    DeliveryEstimateRequest,
    DeliveryEstimateResponse,
)
from domain.schemas.subscription_schemas import (
    SubscriptionCreate,
    SubscriptionResponse,
)

__all__ = [
    # Users and auth
    "UserResponse",
    "UserSummary",
    "RegisterRequest",
    "LoginRequest",
    "ResetPasswordRequest",
    "ChangePasswordWithTokenRequest",
    "AuthResponse",
    "MessageResponse",
    "UserUpdate",
    "UserRoleUpdate",
    "ChangePasswordRequest",
    # Catalog
    "VendorCreate",
    "VendorUpdate",
    "VendorActivationUpdate",
    "VendorResponse",
    "VendorSummary",
    "VendorWithMealsResponse",
    "MealCreate",
    "MealUpdate",
    "MealAvailabilityUpdate",
    "MealFilter",
    "MealResponse",
    "MealSummary",
    # Orders, payments, delivery
    "OrderItemCreate",
    "OrderCreate",
    "OrderStatusUpdate",
    "AssignDeliveryAgentRequest",
    "OrderFilter",
    "OrderItemResponse",
    "OrderResponse",
    "PaymentSummary",
    "PaymentDetails",
    "PaymentValidationResponse",
    "ProcessPaymentRequest",
    "PaymentResponse",
    "DeliveryResponse",
    "DeliveryEstimateRequest",
    "DeliveryEstimateResponse",
    # Subscriptions
    "SubscriptionCreate",
    "SubscriptionResponse",
]
