"""
Payment validation and (simulated) processing.

No payment processor is called: a payment whose details validate is recorded
as PAID straight away.
"""

from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import uuid4
from sqlalchemy.orm import Session
import json
import logging
import re

from domain.models import Payment, User
from domain.enums import OrderStatus, PaymentMethod, PaymentStatus, UserRole
from domain.schemas.order_schemas import PaymentDetails
from repositories import OrderRepository, PaymentRepository
from app.exceptions import (
    NotFoundError,
    ForbiddenError,
    ConflictError,
    ServiceValidationError,
)

logger = logging.getLogger("campusfood.payments")

_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/(\d{2})$")


def _digits(value: Optional[str]) -> str:
    return re.sub(r"[\s-]", "", value or "")


def luhn_valid(number: str) -> bool:
    """Luhn checksum over a string of digits."""
    if not number.isdigit():
        return False
    total = 0
    for index, char in enumerate(reversed(number)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def expiry_valid(expiry: Optional[str], now: Optional[datetime] = None) -> bool:
    """MM/YY that is the current month or later."""
    match = _EXPIRY_RE.match((expiry or "").strip())
    if not match:
        return False
    now = now or datetime.now(timezone.utc)
    month, year = int(match.group(1)), 2000 + int(match.group(2))
    return (year, month) >= (now.year, now.month)


def mask_card_number(number: str) -> str:
    return f"**** **** **** {number[-4:]}"


class PaymentService:
    """Business logic for checkout payments"""

    @staticmethod
    def validate_details(details: PaymentDetails) -> Tuple[bool, str]:
        """
        Check payment details for the chosen method.

        Returns:
            Tuple of (valid, message)
        """
        if details.method == PaymentMethod.CREDIT_CARD:
            number = _digits(details.card_number)
            if not (13 <= len(number) <= 19) or not luhn_valid(number):
                return False, "Invalid card number"
            if not expiry_valid(details.expiry_date):
                return False, "Invalid or expired expiry date"
            cvv = (details.cvv or "").strip()
            if not (cvv.isdigit() and 3 <= len(cvv) <= 4):
                return False, "Invalid CVV"
            if not (details.cardholder_name or "").strip():
                return False, "Cardholder name is required"
            return True, "Card details are valid"

        if details.method == PaymentMethod.MOBILE_MONEY:
            if not (details.mobile_money_provider or "").strip():
                return False, "Mobile money provider is required"
            number = _digits(details.mobile_money_number).lstrip("+")
            if not (number.isdigit() and 9 <= len(number) <= 15):
                return False, "Invalid mobile money number"
            return True, "Mobile money details are valid"

        return True, f"{details.method.value} payment accepted"

    @staticmethod
    def _stored_details(details: PaymentDetails) -> str:
        """Details kept on the payment row. Card data is reduced to its last digits."""
        stored = {"method": details.method.value}
        if details.method == PaymentMethod.CREDIT_CARD:
            stored["card"] = mask_card_number(_digits(details.card_number))
            stored["cardholder_name"] = details.cardholder_name
        elif details.method == PaymentMethod.MOBILE_MONEY:
            stored["provider"] = details.mobile_money_provider
            stored["number"] = _digits(details.mobile_money_number)
        return json.dumps(stored)

    @staticmethod
    def process_payment(
        db: Session, order_id: int, details: PaymentDetails, user: User
    ) -> Payment:
        """
        Pay for an order placed by `user`.

        Raises:
            NotFoundError: If the order does not exist
            ForbiddenError: If the order belongs to someone else
            ServiceValidationError: If the order is cancelled or details are invalid
            ConflictError: If the order has already been paid
        """
        order = OrderRepository(db).get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order {order_id} not found")
        if order.customer_id != user.id:
            raise ForbiddenError("You can only pay for your own orders")
        if order.status == OrderStatus.CANCELLED:
            raise ServiceValidationError("Cannot pay for a cancelled order")

        payment = order.payment
        if payment is not None and payment.status == PaymentStatus.PAID:
            raise ConflictError(f"Order {order_id} has already been paid")

        valid, message = PaymentService.validate_details(details)
        if not valid:
            logger.warning(f"payment_rejected order_id={order_id} reason={message!r}")
            raise ServiceValidationError(message)

        if payment is None:
            payment = Payment(order_id=order.id)
            db.add(payment)
        payment.amount = order.total_amount
        payment.method = details.method
        payment.status = PaymentStatus.PAID
        payment.transaction_id = f"TXN-{uuid4().hex[:16].upper()}"
        payment.payment_details = PaymentService._stored_details(details)
        db.commit()
        db.refresh(payment)

        logger.info(
            f"payment_processed order_id={order_id} payment_id={payment.id} "
            f"method={details.method.value} amount={payment.amount}"
        )
        return payment

    @staticmethod
    def get_for_order(db: Session, order_id: int, user: User) -> Payment:
        order = OrderRepository(db).get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order {order_id} not found")
        if user.role != UserRole.ADMIN and order.customer_id != user.id:
            raise ForbiddenError("You do not have access to this payment")

        payment = PaymentRepository(db).get_by_order_id(order_id)
        if not payment:
            raise NotFoundError(f"No payment found for order {order_id}")
        return payment
