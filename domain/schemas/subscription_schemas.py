from pydantic import BaseModel, Field
from typing import Annotated, Optional, List
from datetime import datetime
from decimal import Decimal

from domain.schemas.catalog_schemas import MealSummary
from domain.schemas.limits import MAX_AMOUNT, MAX_DB_ID


class SubscriptionCreate(BaseModel):
    """Schema for subscribing to a weekly meal plan"""

    plan_name: str = Field(..., min_length=1, max_length=255)
    monthly_fee: Decimal = Field(..., ge=0, le=MAX_AMOUNT, decimal_places=2)
    meals_per_week: int = Field(..., ge=1, le=21)
    meal_ids: List[Annotated[int, Field(ge=1, le=MAX_DB_ID)]] = Field(
        default_factory=list
    )
    start_date: Optional[datetime] = None


class SubscriptionResponse(BaseModel):
    id: int
    subscriber_id: int
    plan_name: str
    monthly_fee: Decimal
    meals_per_week: int
    is_active: bool
    start_date: datetime
    end_date: Optional[datetime] = None
    included_meals: List[MealSummary] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
