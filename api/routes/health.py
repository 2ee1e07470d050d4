"""Health check and seeding routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, require_roles
from api.responses import HealthResponse
from app.config import settings
from domain.enums import UserRole
from domain.models import User, check_database
from domain.schemas.user_schemas import MessageResponse
from services.seed_service import SeedService

router = APIRouter(tags=["Health"])
logger = logging.getLogger("campusfood.api.health")


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Service liveness plus a database round trip."""
    database_ok = check_database()
    return HealthResponse(
        status="ok" if database_ok else "degraded",
        service=settings.app_name,
        version=settings.app_version,
        database="ok" if database_ok else "unavailable",
    )


@router.post("/seed", response_model=MessageResponse)
def seed_database(
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserRole.ADMIN)),
):
    return MessageResponse(message=SeedService.seed(db))
