"""Payment routes"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_current_user, get_db
from domain.mappers import PaymentMapper
from domain.models import User
from domain.schemas.limits import MAX_DB_ID
from domain.schemas.order_schemas import (
    PaymentDetails,
    PaymentResponse,
    PaymentValidationResponse,
    ProcessPaymentRequest,
)
from services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])
logger = logging.getLogger("campusfood.api.payments")


@router.post("/validate", response_model=PaymentValidationResponse)
def validate_payment(details: PaymentDetails):
    """Check payment details without charging anything."""
    valid, message = PaymentService.validate_details(details)
    return PaymentValidationResponse(valid=valid, message=message)


@router.post(
    "/process", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED
)
def process_payment(
    payload: ProcessPaymentRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    payment = PaymentService.process_payment(db, payload.order_id, payload.details, user)
    return PaymentMapper.to_response(payment)


@router.get("/order/{order_id}", response_model=PaymentResponse)
def get_order_payment(
    order_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return PaymentMapper.to_response(PaymentService.get_for_order(db, order_id, user))
