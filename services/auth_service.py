from typing import Tuple
import hmac
from sqlalchemy.orm import Session
import logging

from domain.models import User
from domain.enums import UserRole
from domain.schemas.user_schemas import RegisterRequest, LoginRequest
from repositories import UserRepository
from app.security import (
    hash_password,
    verify_password,
    create_access_token,
    create_reset_token,
    decode_token,
    password_fingerprint,
    PASSWORD_RESET_TOKEN,
)
from app.exceptions import (
    ConflictError,
    UnauthorizedError,
    ServiceValidationError,
)

logger = logging.getLogger("campusfood.auth")

RESET_REQUESTED_MESSAGE = (
    "If an account exists for this email, a password reset link has been sent"
)


class AuthService:
    """Registration, login and password reset"""

    @staticmethod
    def register(db: Session, payload: RegisterRequest) -> Tuple[User, str]:
        """
        Create a CUSTOMER account and sign it in.

        Returns:
            Tuple of (new user, access token)

        Raises:
            ConflictError: If the email is already registered
        """
        user_repo = UserRepository(db)
        if user_repo.get_by_email(payload.email):
            logger.warning(f"register_conflict email={payload.email}")
            raise ConflictError("User with this email already exists")

        user = user_repo.create_user(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            phone_number=payload.phone_number,
            role=UserRole.CUSTOMER,
        )
        logger.info(f"user_registered user_id={user.id}")
        return user, create_access_token(user)

    @staticmethod
    def login(db: Session, payload: LoginRequest) -> Tuple[User, str]:
        user = UserRepository(db).get_by_email(payload.email)
        if not user or not verify_password(payload.password, user.password_hash):
            logger.warning(f"login_failed email={payload.email}")
            raise UnauthorizedError("Invalid credentials")

        logger.info(f"login_succeeded user_id={user.id}")
        return user, create_access_token(user)

    @staticmethod
    def request_password_reset(db: Session, email: str) -> str:
        """
        Issue a reset token for a known email.

        The returned message is the same whether or not the account exists.
        """
        user = UserRepository(db).get_by_email(email)
        if user:
            token = create_reset_token(user)
            # Mail delivery is not wired up; only a token suffix is logged
            logger.info(
                f"password_reset_requested user_id={user.id} token_suffix={token[-8:]}"
            )
        else:
            logger.info("password_reset_requested_unknown_email")
        return RESET_REQUESTED_MESSAGE

    @staticmethod
    def change_password_with_token(db: Session, token: str, new_password: str) -> None:
        try:
            claims = decode_token(token, purpose=PASSWORD_RESET_TOKEN)
        except UnauthorizedError as e:
            raise ServiceValidationError(f"Invalid or expired reset token: {e}")

        user_repo = UserRepository(db)
        try:
            user = user_repo.get_by_id(int(claims["sub"]))
        except (TypeError, ValueError):
            user = None
        if not user:
            raise ServiceValidationError("Invalid or expired reset token")
        if not hmac.compare_digest(
            str(claims.get("pwh", "")), password_fingerprint(user.password_hash)
        ):
            logger.warning(f"password_reset_token_stale user_id={user.id}")
            raise ServiceValidationError("Invalid or expired reset token")

        user.password_hash = hash_password(new_password)
        user_repo.update_user(user)
        logger.info(f"password_reset_completed user_id={user.id}")

    @staticmethod
    def authenticate_token(db: Session, token: str) -> User:
        """Resolve a bearer token to its user, or raise UnauthorizedError."""
        claims = decode_token(token)
        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError):
            raise UnauthorizedError("Invalid token")

        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise UnauthorizedError("User no longer exists")
        return user
