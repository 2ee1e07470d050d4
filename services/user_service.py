from typing import List, Tuple
from sqlalchemy.orm import Session
import logging

from domain.models import User
from domain.enums import UserRole
from domain.schemas.user_schemas import UserUpdate, UserRoleUpdate
from repositories import UserRepository, VendorRepository
from app.security import hash_password, verify_password
from app.exceptions import (
    NotFoundError,
    ConflictError,
    ForbiddenError,
    ServiceValidationError,
)

logger = logging.getLogger("campusfood.users")


class UserService:
    """Business logic for user accounts and profiles"""

    @staticmethod
    def list_users(db: Session, page: int, limit: int) -> Tuple[List[User], int]:
        return UserRepository(db).list_page(page, limit)

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            logger.warning(f"user_not_found user_id={user_id}")
            raise NotFoundError(f"User {user_id} not found")
        return user

    @staticmethod
    def get_user_for(db: Session, user_id: int, requester: User) -> User:
        """Fetch a user, visible to admins and to the user themselves."""
        if requester.role != UserRole.ADMIN and requester.id != user_id:
            raise ForbiddenError("You can only view your own account")
        return UserService.get_user(db, user_id)

    @staticmethod
    def update_profile(db: Session, user: User, payload: UserUpdate) -> User:
        """
        Apply profile changes for the current user.

        Raises:
            ConflictError: If the new email belongs to another account
        """
        user_repo = UserRepository(db)
        changes = payload.model_dump(exclude_unset=True)

        new_email = changes.get("email")
        if new_email:
            owner = user_repo.get_by_email(new_email)
            if owner and owner.id != user.id:
                raise ConflictError(f"Email {new_email} is already taken")
            changes["email"] = new_email.strip().lower()

        for field, value in changes.items():
            if field in ("name", "email") and value is None:
                continue
            setattr(user, field, value)

        user = user_repo.update_user(user)
        logger.info(
            f"profile_updated user_id={user.id} fields={sorted(changes.keys())}"
        )
        return user

    @staticmethod
    def change_password(
        db: Session, user: User, current_password: str, new_password: str
    ) -> None:
        if not verify_password(current_password, user.password_hash):
            logger.warning(f"password_change_rejected user_id={user.id}")
            raise ServiceValidationError("Current password is incorrect")

        user.password_hash = hash_password(new_password)
        UserRepository(db).update_user(user)
        logger.info(f"password_changed user_id={user.id}")

    @staticmethod
    def update_role(db: Session, user_id: int, payload: UserRoleUpdate) -> User:
        """Change a user's role; VENDOR accounts may be linked to a vendor."""
        user_repo = UserRepository(db)
        user = user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")

        if payload.vendor_id is not None:
            if not VendorRepository(db).exists(payload.vendor_id):
                raise NotFoundError(f"Vendor {payload.vendor_id} not found")
            user.vendor_id = payload.vendor_id
        elif payload.role != UserRole.VENDOR:
            user.vendor_id = None

        user.role = payload.role
        user = user_repo.update_user(user)
        logger.info(
            f"user_role_updated user_id={user.id} role={user.role.value} "
            f"vendor_id={user.vendor_id}"
        )
        return user

    @staticmethod
    def delete_user(db: Session, user_id: int) -> None:
        if not UserRepository(db).delete(user_id):
            raise NotFoundError(f"User {user_id} not found")
        logger.info(f"user_deleted user_id={user_id}")
