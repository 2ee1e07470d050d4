"""Registration, login and password reset routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from domain.schemas.user_schemas import (
    AuthResponse,
    ChangePasswordWithTokenRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("campusfood.api.auth")


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create a customer account and return it with an access token."""
    user, token = AuthService.register(db, payload)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, token = AuthService.login(db, payload)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    message = AuthService.request_password_reset(db, payload.email)
    return MessageResponse(message=message)


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordWithTokenRequest, db: Session = Depends(get_db)
):
    """Set a new password using a reset token."""
    AuthService.change_password_with_token(db, payload.token, payload.new_password)
    return MessageResponse(message="Password changed successfully")
