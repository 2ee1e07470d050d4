from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from domain.schemas.limits import MAX_AMOUNT, MAX_DB_ID


# =============================================================================
# VENDORS
# =============================================================================


class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    phone_number: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    is_active: Optional[bool] = True


class VendorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1)
    phone_number: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    is_active: Optional[bool] = None


class VendorActivationUpdate(BaseModel):
    is_active: bool


class VendorResponse(BaseModel):
    id: int
    name: str
    address: str
    phone_number: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class VendorSummary(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


# =============================================================================
# MEALS
# =============================================================================


class MealCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    price: Decimal = Field(
        ..., ge=0, le=MAX_AMOUNT, decimal_places=2, description="Unit price"
    )
    category: str = Field(..., min_length=1, max_length=100)
    image_url: Optional[str] = None
    is_available: Optional[bool] = True
    is_featured: Optional[bool] = False
    vendor_id: int = Field(..., ge=1, le=MAX_DB_ID)


class MealUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(
        None, ge=0, le=MAX_AMOUNT, decimal_places=2
    )
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    image_url: Optional[str] = None
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None


class MealAvailabilityUpdate(BaseModel):
    is_available: bool


class MealFilter(BaseModel):
    """Query filters for the meal listing"""

    search: Optional[str] = None
    category: Optional[str] = None
    vendor_id: Optional[int] = None
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)


class MealResponse(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    category: str
    image_url: Optional[str] = None
    is_available: bool
    is_featured: bool
    vendor_id: int
    vendor: Optional[VendorSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MealSummary(BaseModel):
    id: int
    name: str
    price: Decimal

    model_config = {"from_attributes": True}


class VendorWithMealsResponse(VendorResponse):
    meals: List[MealResponse] = []
