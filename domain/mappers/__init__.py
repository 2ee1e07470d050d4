"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.order_mapper import OrderMapper, PaymentMapper

__all__ = ["OrderMapper", "PaymentMapper"]
