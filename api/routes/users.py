"""User management routes"""

from fastapi import APIRouter, Depends, Path
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
from domain.schemas.user_schemas import (
    ChangePasswordRequest,
    MessageResponse,
    UserResponse,
    UserRoleUpdate,
    UserUpdate,
)
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("campusfood.api.users")


@router.get("", response_model=PaginatedResponse[UserResponse])
def get_all_users(
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserRole.ADMIN)),
):
    """Return all users, newest first."""
    users, total = UserService.list_users(db, paging.page, paging.limit)
    return paginated_response(
        [UserResponse.model_validate(u) for u in users],
        total,
        paging.page,
        paging.limit,
    )


@router.get("/profile", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)):
    return user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return UserService.update_profile(db, user, payload)


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    UserService.change_password(
        db, user, payload.current_password, payload.new_password
    )
    return MessageResponse(message="Password changed successfully")


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Get a user account. Non-admins may only read their own."""
    return UserService.get_user_for(db, user_id, user)


@router.put("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    payload: UserRoleUpdate,
    user_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserRole.ADMIN)),
):
    return UserService.update_role(db, user_id, payload)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserRole.ADMIN)),
):
    """Delete a user and all their related data."""
    UserService.delete_user(db, user_id)
    return MessageResponse(message=f"User {user_id} deleted")
