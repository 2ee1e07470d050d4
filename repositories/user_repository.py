"""
User Repository - Data access layer for user accounts
"""

from typing import Optional, List, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import User
from domain.enums import UserRole
from app.exceptions import ConflictError


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)"""
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )

    def get_by_id_and_role(self, user_id: int, role: UserRole) -> Optional[User]:
        return (
            self.db.query(User).filter(User.id == user_id, User.role == role).first()
        )

    def list_page(self, page: int, limit: int) -> Tuple[List[User], int]:
        """Users newest first"""
        query = self.db.query(User).order_by(User.created_at.desc(), User.id.desc())
        return self.paginate(query, page, limit)

    def create_user(
        self,
        name: str,
        email: str,
        password_hash: str,
        phone_number: Optional[str] = None,
        role: UserRole = UserRole.CUSTOMER,
    ) -> User:
        """Create a new user"""
        user = User(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            phone_number=phone_number,
            role=role,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("User with this email already exists")

    def update_user(self, user: User) -> User:
        """Persist changes made to a user"""
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Email {user.email} is already taken")
        self.db.refresh(user)
        return user
