"""
Shopping cart bookkeeping.

Pure in-memory line items and totals. The order service prices every new
order through a Cart so the stored total always equals the sum of its lines.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from app.exceptions import ServiceValidationError


@dataclass
class CartItem:
    """One cart line: a meal and how many of it"""

    meal_id: int
    name: str
    price: Decimal
    quantity: int = 1
    vendor_name: Optional[str] = None
    image_url: Optional[str] = None
    special_instructions: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Cart:
    """Cart of meals keyed by meal id, in insertion order"""

    _lines: Dict[int, CartItem] = field(default_factory=dict)
    delivery_address: str = ""
    delivery_instructions: str = ""

    @property
    def items(self) -> List[CartItem]:
        return list(self._lines.values())

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self._lines.values()), Decimal("0"))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, meal_id: int) -> Optional[CartItem]:
        return self._lines.get(meal_id)

    def add_item(
        self,
        meal_id: int,
        name: str,
        price,
        quantity: int = 1,
        vendor_name: Optional[str] = None,
        image_url: Optional[str] = None,
        special_instructions: Optional[str] = None,
    ) -> CartItem:
        """Add a meal, or bump the quantity of an existing line."""
        if quantity < 1:
            raise ServiceValidationError(
                f"Quantity for meal {meal_id} must be at least 1"
            )
        existing = self._lines.get(meal_id)
        if existing:
            existing.quantity += quantity
            if special_instructions:
                existing.special_instructions = special_instructions
            return existing

        item = CartItem(
            meal_id=meal_id,
            name=name,
            price=Decimal(str(price)),
            quantity=quantity,
            vendor_name=vendor_name,
            image_url=image_url,
            special_instructions=special_instructions,
        )
        self._lines[meal_id] = item
        return item

    def remove_item(self, meal_id: int) -> None:
        self._lines.pop(meal_id, None)

    def update_quantity(self, meal_id: int, quantity: int) -> None:
        """Set a line's quantity; zero or less drops the line."""
        item = self._lines.get(meal_id)
        if item is None:
            return
        if quantity <= 0:
            del self._lines[meal_id]
        else:
            item.quantity = quantity

    def update_special_instructions(self, meal_id: int, instructions: str) -> None:
        item = self._lines.get(meal_id)
        if item is not None:
            item.special_instructions = instructions

    def set_delivery_details(
        self, address: Optional[str] = None, instructions: Optional[str] = None
    ) -> None:
        if address is not None:
            self.delivery_address = address
        if instructions is not None:
            self.delivery_instructions = instructions

    def clear(self) -> None:
        self._lines.clear()

    def to_order_items(self) -> List[dict]:
        """Line items in the shape accepted by POST /orders."""
        return [
            {
                "meal_id": item.meal_id,
                "quantity": item.quantity,
                "special_instructions": item.special_instructions,
            }
            for item in self._lines.values()
        ]
