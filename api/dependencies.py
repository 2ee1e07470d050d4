"""
API dependencies for dependency injection
"""

from dataclasses import dataclass
from typing import Callable, Generator, Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import ForbiddenError, UnauthorizedError
from domain.enums import UserRole
from domain.models import User, get_db_session
from services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user, or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")
    return AuthService.authenticate_token(db, credentials.credentials)


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """
    Dependency factory restricting a route to the given roles.

    Usage:
        @router.get("/admin-only")
        def admin_only(user: User = Depends(require_roles(UserRole.ADMIN))):
            ...
    """

    def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise ForbiddenError("Insufficient permissions")
        return user

    return checker


@dataclass
class PageParams:
    page: int
    limit: int


def get_page_params(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Items per page",
    ),
) -> PageParams:
    return PageParams(page=page, limit=limit)
