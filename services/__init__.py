"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.user_service import UserService
from services.vendor_service import VendorService
from services.meal_service import MealService
from services.delivery_service import DeliveryService
from services.order_service import OrderService
from services.payment_service import PaymentService
from services.subscription_service import SubscriptionService
from services.seed_service import SeedService

__all__ = [
    "AuthService",
    "UserService",
    "VendorService",
    "MealService",
    "DeliveryService",
    "OrderService",
    "PaymentService",
    "SubscriptionService",
    "SeedService",
]
