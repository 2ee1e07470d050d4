"""Delivery estimate and tracking routes"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_current_user, get_db
from domain.models import User
from domain.schemas.limits import MAX_DB_ID
from domain.schemas.order_schemas import (
    DeliveryEstimateRequest,
    DeliveryEstimateResponse,
    DeliveryResponse,
)
from services.delivery_service import DeliveryService

router = APIRouter(prefix="/delivery", tags=["Delivery"])
logger = logging.getLogger("campusfood.api.delivery")


@router.post("/estimate", response_model=DeliveryEstimateResponse)
def estimate_delivery(
    payload: DeliveryEstimateRequest, db: Session = Depends(get_db)
):
    return DeliveryService.estimate(db, payload)


@router.get("/order/{order_id}", response_model=DeliveryResponse)
def get_order_delivery(
    order_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Tracking details for an order the caller can see."""
    return DeliveryService.get_for_order(db, order_id, user)
