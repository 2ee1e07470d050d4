from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging

from domain.models import Vendor
from domain.schemas.catalog_schemas import VendorCreate, VendorUpdate
from repositories import VendorRepository
from app.exceptions import NotFoundError, ConflictError

logger = logging.getLogger("campusfood.vendors")


class VendorService:
    """Business logic for the vendor directory"""

    @staticmethod
    def _ensure_email_free(
        repo: VendorRepository, email: Optional[str], vendor_id: Optional[int] = None
    ) -> None:
        if not email:
            return
        existing = repo.get_by_email(email)
        if existing and existing.id != vendor_id:
            raise ConflictError(f"Vendor with email {email} already exists")

    @staticmethod
    def list_vendors(db: Session, page: int, limit: int) -> Tuple[List[Vendor], int]:
        return VendorRepository(db).list_page(page, limit)

    @staticmethod
    def list_active(db: Session, page: int, limit: int) -> Tuple[List[Vendor], int]:
        return VendorRepository(db).list_active(page, limit)

    @staticmethod
    def search(
        db: Session, term: str, page: int, limit: int
    ) -> Tuple[List[Vendor], int]:
        return VendorRepository(db).search(term, page, limit)

    @staticmethod
    def get_vendor(db: Session, vendor_id: int) -> Vendor:
        vendor = VendorRepository(db).get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError(f"Vendor {vendor_id} not found")
        return vendor

    @staticmethod
    def get_vendor_with_meals(db: Session, vendor_id: int) -> Vendor:
        vendor = VendorRepository(db).get_with_meals(vendor_id)
        if not vendor:
            raise NotFoundError(f"Vendor {vendor_id} not found")
        return vendor

    @staticmethod
    def create_vendor(db: Session, payload: VendorCreate) -> Vendor:
        """
        Register a new vendor.

        Raises:
            ConflictError: If another vendor already uses the email
        """
        repo = VendorRepository(db)
        VendorService._ensure_email_free(repo, payload.email)

        data = payload.model_dump()
        if data.get("is_active") is None:
            data["is_active"] = True
        vendor = repo.create(Vendor(**data))
        logger.info(f"vendor_created vendor_id={vendor.id} name={vendor.name!r}")
        return vendor

    @staticmethod
    def update_vendor(db: Session, vendor_id: int, payload: VendorUpdate) -> Vendor:
        repo = VendorRepository(db)
        vendor = VendorService.get_vendor(db, vendor_id)

        changes = payload.model_dump(exclude_unset=True)
        VendorService._ensure_email_free(repo, changes.get("email"), vendor_id)

        for field, value in changes.items():
            # name, address and is_active are NOT NULL
            if value is None and field in ("name", "address", "is_active"):
                continue
            setattr(vendor, field, value)

        vendor = repo.update(vendor)
        logger.info(f"vendor_updated vendor_id={vendor_id}")
        return vendor

    @staticmethod
    def set_active(db: Session, vendor_id: int, is_active: bool) -> Vendor:
        vendor = VendorService.get_vendor(db, vendor_id)
        vendor.is_active = is_active
        vendor = VendorRepository(db).update(vendor)
        logger.info(f"vendor_activation vendor_id={vendor_id} is_active={is_active}")
        return vendor

    @staticmethod
    def delete_vendor(db: Session, vendor_id: int) -> None:
        if not VendorRepository(db).delete(vendor_id):
            raise NotFoundError(f"Vendor {vendor_id} not found")
        logger.info(f"vendor_deleted vendor_id={vendor_id}")
