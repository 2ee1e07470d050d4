"""
Order domain mappers.
Handles transformation between ORM models and DTOs for orders and payments.
"""

import json
from typing import Optional
from domain.models import Order, Payment
from domain.schemas.order_schemas import (
    OrderResponse,
    OrderItemResponse,
    PaymentResponse,
    PaymentSummary,
    DeliveryResponse,
)
from domain.schemas.catalog_schemas import MealSummary
from domain.schemas.user_schemas import UserSummary


class OrderMapper:
    """Mapper for order-related transformations."""

    @staticmethod
    def to_response(order: Order) -> OrderResponse:
        """
        Convert an Order ORM model to OrderResponse DTO.

        Args:
            order: Order instance with items, parties, payment and delivery loaded

        Returns:
            OrderResponse DTO with per-line subtotals
        """
        items = [
            OrderItemResponse(
                meal_id=item.meal_id,
                meal_name=item.meal_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.unit_price * item.quantity,
                special_instructions=item.special_instructions,
                meal=MealSummary.model_validate(item.meal) if item.meal else None,
            )
            for item in order.items
        ]

        return OrderResponse(
            id=order.id,
            status=order.status,
            total_amount=order.total_amount,
            delivery_address=order.delivery_address,
            delivery_notes=order.delivery_notes,
            customer=(
                UserSummary.model_validate(order.customer) if order.customer else None
            ),
            delivery_agent=(
                UserSummary.model_validate(order.delivery_agent)
                if order.delivery_agent
                else None
            ),
            items=items,
            payment=(
                PaymentSummary.model_validate(order.payment) if order.payment else None
            ),
            delivery=(
                DeliveryResponse.model_validate(order.delivery)
                if order.delivery
                else None
            ),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class PaymentMapper:
    """Mapper for payment records; stored details are decoded from JSON."""

    @staticmethod
    def to_response(payment: Payment) -> PaymentResponse:
        details: Optional[dict] = None
        if payment.payment_details:
            try:
                details = json.loads(payment.payment_details)
            except ValueError:
                details = {"raw": payment.payment_details}

        return PaymentResponse(
            id=payment.id,
            order_id=payment.order_id,
            amount=payment.amount,
            status=payment.status,
            method=payment.method,
            transaction_id=payment.transaction_id,
            payment_details=details,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )
