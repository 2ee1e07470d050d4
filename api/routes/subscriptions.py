"""Meal plan subscription routes"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import (
    PageParams,
    get_current_user,
    get_db,
    get_page_params,
    require_roles,
)
from api.responses import PaginatedResponse, paginated_response
from domain.enums import UserRole
from domain.models import User
from domain.schemas.limits import MAX_DB_ID
from domain.schemas.subscription_schemas import (
    SubscriptionCreate,
    SubscriptionResponse,
)
from services.subscription_service import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])
logger = logging.getLogger("campusfood.api.subscriptions")


@router.post(
    "", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED
)
def subscribe(
    payload: SubscriptionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return SubscriptionService.subscribe(db, payload, user)


@router.get("/me", response_model=List[SubscriptionResponse])
def list_my_subscriptions(
    db: Session = Depends(get_db), user: User = Depends(get_current_user)
):
    return SubscriptionService.list_for_user(db, user)


@router.get("", response_model=PaginatedResponse[SubscriptionResponse])
def list_subscriptions(
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserRole.ADMIN)),
):
    subscriptions, total = SubscriptionService.list_all(db, paging.page, paging.limit)
    return paginated_response(
        [SubscriptionResponse.model_validate(s) for s in subscriptions],
        total,
        paging.page,
        paging.limit,
    )


@router.delete("/{subscription_id}", response_model=SubscriptionResponse)
def cancel_subscription(
    subscription_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Deactivate a subscription."""
    return SubscriptionService.cancel(db, subscription_id, user)
