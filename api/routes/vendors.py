"""Vendor directory routes"""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import PageParams, get_db, get_page_params, require_roles
from api.responses import PaginatedResponse, paginated_response
from domain.enums import UserRole
from domain.models import User
from domain.schemas.limits import MAX_DB_ID
from domain.schemas.catalog_schemas import (
    VendorActivationUpdate,
    VendorCreate,
    VendorResponse,
    VendorUpdate,
    VendorWithMealsResponse,
)
from domain.schemas.user_schemas import MessageResponse
from services.vendor_service import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])
logger = logging.getLogger("campusfood.api.vendors")

admin_only = require_roles(UserRole.ADMIN)


def _page(vendors, total, paging: PageParams) -> dict:
    return paginated_response(
        [VendorResponse.model_validate(v) for v in vendors],
        total,
        paging.page,
        paging.limit,
    )


@router.get("", response_model=PaginatedResponse[VendorResponse])
def list_vendors(
    paging: PageParams = Depends(get_page_params), db: Session = Depends(get_db)
):
    vendors, total = VendorService.list_vendors(db, paging.page, paging.limit)
    return _page(vendors, total, paging)


@router.get("/active", response_model=PaginatedResponse[VendorResponse])
def list_active_vendors(
    paging: PageParams = Depends(get_page_params), db: Session = Depends(get_db)
):
    vendors, total = VendorService.list_active(db, paging.page, paging.limit)
    return _page(vendors, total, paging)


@router.get("/search", response_model=PaginatedResponse[VendorResponse])
def search_vendors(
    term: str = Query(..., min_length=1, description="Text to find in name or description"),
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
):
    vendors, total = VendorService.search(db, term, paging.page, paging.limit)
    return _page(vendors, total, paging)


@router.get("/{vendor_id}", response_model=VendorResponse)
def get_vendor(
    vendor_id: int = Path(..., le=MAX_DB_ID), db: Session = Depends(get_db)
):
    return VendorService.get_vendor(db, vendor_id)


@router.get("/{vendor_id}/meals", response_model=VendorWithMealsResponse)
def get_vendor_with_meals(
    vendor_id: int = Path(..., le=MAX_DB_ID), db: Session = Depends(get_db)
):
    """Vendor profile together with its full menu."""
    return VendorService.get_vendor_with_meals(db, vendor_id)


@router.post("", response_model=VendorResponse, status_code=status.HTTP_201_CREATED)
def create_vendor(
    payload: VendorCreate,
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
):
    return VendorService.create_vendor(db, payload)


@router.put("/{vendor_id}", response_model=VendorResponse)
def update_vendor(
    payload: VendorUpdate,
    vendor_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
):
    return VendorService.update_vendor(db, vendor_id, payload)


@router.patch("/{vendor_id}/activation", response_model=VendorResponse)
def set_vendor_activation(
    payload: VendorActivationUpdate,
    vendor_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
):
    return VendorService.set_active(db, vendor_id, payload.is_active)


@router.delete("/{vendor_id}", response_model=MessageResponse)
def delete_vendor(
    vendor_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
):
    VendorService.delete_vendor(db, vendor_id)
    return MessageResponse(message=f"Vendor {vendor_id} deleted")
