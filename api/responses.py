"""
Standardized API response models and utilities.
Provides consistent response formatting across all endpoints.
"""

from typing import Generic, TypeVar, Optional, Any, List
from pydantic import BaseModel, Field
from datetime import datetime, timezone
import math

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated API response"""

    data: List[T] = Field(..., description="Items on this page")
    total: int = Field(..., description="Total number of items")
    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Number of items per page")
    total_pages: int = Field(..., description="Number of pages")

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    database: str = Field(..., description="Database connectivity")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")


def error_response(code: str, message: str, details: Any = None) -> dict:
    """Create a standardized error response body"""
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {
        "success": False,
        "error": error,
        "timestamp": _utcnow().isoformat(),
    }


def paginated_response(items: List[Any], total: int, page: int, limit: int) -> dict:
    """Create a standardized paginated response"""
    return {
        "data": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }
