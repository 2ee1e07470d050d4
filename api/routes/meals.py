"""Meal catalog routes"""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import PageParams, get_db, get_page_params, require_roles
from api.responses import PaginatedResponse, paginated_response
from domain.enums import UserRole
from domain.models import User
from domain.schemas.limits import MAX_DB_ID
from domain.schemas.catalog_schemas import (
    MealAvailabilityUpdate,
    MealCreate,
    MealFilter,
    MealResponse,
    MealUpdate,
)
from domain.schemas.user_schemas import MessageResponse
from services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("campusfood.api.meals")

menu_managers = require_roles(UserRole.VENDOR, UserRole.ADMIN)


def get_meal_filter(
    search: Optional[str] = Query(None, description="Text in name or description"),
    category: Optional[str] = None,
    vendor_id: Optional[int] = Query(None, le=MAX_DB_ID),
    is_available: Optional[bool] = None,
    is_featured: Optional[bool] = None,
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
) -> MealFilter:
    return MealFilter(
        search=search,
        category=category,
        vendor_id=vendor_id,
        is_available=is_available,
        is_featured=is_featured,
        min_price=min_price,
        max_price=max_price,
    )


@router.get("", response_model=PaginatedResponse[MealResponse])
def list_meals(
    filters: MealFilter = Depends(get_meal_filter),
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
):
    """Browse meals, newest first."""
    meals, total = MealService.list_meals(db, paging.page, paging.limit, filters)
    return paginated_response(
        [MealResponse.model_validate(m) for m in meals],
        total,
        paging.page,
        paging.limit,
    )


@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    return MealService.get_categories(db)


@router.get("/vendor/{vendor_id}", response_model=PaginatedResponse[MealResponse])
def list_vendor_meals(
    vendor_id: int = Path(..., le=MAX_DB_ID),
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
):
    meals, total = MealService.list_by_vendor(db, vendor_id, paging.page, paging.limit)
    return paginated_response(
        [MealResponse.model_validate(m) for m in meals],
        total,
        paging.page,
        paging.limit,
    )


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: int = Path(..., le=MAX_DB_ID), db: Session = Depends(get_db)
):
    return MealService.get_meal(db, meal_id)


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    payload: MealCreate,
    db: Session = Depends(get_db),
    user: User = Depends(menu_managers),
):
    return MealService.create_meal(db, payload, user)


@router.put("/{meal_id}", response_model=MealResponse)
def update_meal(
    payload: MealUpdate,
    meal_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(menu_managers),
):
    return MealService.update_meal(db, meal_id, payload, user)


@router.patch("/{meal_id}/availability", response_model=MealResponse)
def set_meal_availability(
    payload: MealAvailabilityUpdate,
    meal_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(menu_managers),
):
    return MealService.set_availability(db, meal_id, payload.is_available, user)


@router.delete("/{meal_id}", response_model=MessageResponse)
def delete_meal(
    meal_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(menu_managers),
):
    MealService.delete_meal(db, meal_id, user)
    return MessageResponse(message=f"Meal {meal_id} deleted")
