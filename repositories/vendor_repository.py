"""
Vendor and Meal repositories - catalog data access
"""

from decimal import Decimal
from typing import Optional, List, Tuple
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import Vendor, Meal
from domain.schemas.catalog_schemas import MealFilter

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """Case-folded LIKE pattern matching `term` literally anywhere in a value."""
    escaped = (
        term.strip()
        .lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class VendorRepository(BaseRepository[Vendor]):
    """Repository for vendor data access"""

    def __init__(self, db: Session):
        super().__init__(db, Vendor)

    def get_by_email(self, email: str) -> Optional[Vendor]:
        return (
            self.db.query(Vendor)
            .filter(func.lower(Vendor.email) == email.strip().lower())
            .first()
        )

    def get_with_meals(self, vendor_id: int) -> Optional[Vendor]:
        return (
            self.db.query(Vendor)
            .options(joinedload(Vendor.meals))
            .filter(Vendor.id == vendor_id)
            .first()
        )

    def list_page(self, page: int, limit: int) -> Tuple[List[Vendor], int]:
        """All vendors, newest first"""
        query = self.db.query(Vendor).order_by(
            Vendor.created_at.desc(), Vendor.id.desc()
        )
        return self.paginate(query, page, limit)

    def list_active(self, page: int, limit: int) -> Tuple[List[Vendor], int]:
        """Active vendors by name"""
        query = (
            self.db.query(Vendor)
            .filter(Vendor.is_active.is_(True))
            .order_by(Vendor.name.asc(), Vendor.id.asc())
        )
        return self.paginate(query, page, limit)

    def search(self, term: str, page: int, limit: int) -> Tuple[List[Vendor], int]:
        """Vendors whose name or description contains `term`"""
        pattern = contains_pattern(term)
        query = (
            self.db.query(Vendor)
            .filter(
                or_(
                    func.lower(Vendor.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(Vendor.description).like(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(Vendor.name.asc(), Vendor.id.asc())
        )
        return self.paginate(query, page, limit)


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_by_ids(self, meal_ids: List[int]) -> List[Meal]:
        if not meal_ids:
            return []
        return self.db.query(Meal).filter(Meal.id.in_(meal_ids)).all()

    def count(self) -> int:
        return self.db.query(Meal).count()

    def list_page(
        self, page: int, limit: int, filters: Optional[MealFilter] = None
    ) -> Tuple[List[Meal], int]:
        """Meals newest first, narrowed by the optional filters"""
        query = self.db.query(Meal).options(joinedload(Meal.vendor))

        if filters:
            if filters.search:
                pattern = contains_pattern(filters.search)
                query = query.filter(
                    or_(
                        func.lower(Meal.name).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(Meal.description).like(pattern, escape=LIKE_ESCAPE),
                    )
                )
            if filters.category:
                query = query.filter(Meal.category == filters.category)
            if filters.vendor_id is not None:
                query = query.filter(Meal.vendor_id == filters.vendor_id)
            if filters.is_available is not None:
                query = query.filter(Meal.is_available.is_(filters.is_available))
            if filters.is_featured is not None:
                query = query.filter(Meal.is_featured.is_(filters.is_featured))
            if filters.min_price is not None:
                query = query.filter(Meal.price >= Decimal(filters.min_price))
            if filters.max_price is not None:
                query = query.filter(Meal.price <= Decimal(filters.max_price))

        query = query.order_by(Meal.created_at.desc(), Meal.id.desc())
        return self.paginate(query, page, limit)

    def list_by_vendor(
        self, vendor_id: int, page: int, limit: int
    ) -> Tuple[List[Meal], int]:
        query = (
            self.db.query(Meal)
            .filter(Meal.vendor_id == vendor_id)
            .order_by(Meal.created_at.desc(), Meal.id.desc())
        )
        return self.paginate(query, page, limit)

    def get_categories(self) -> List[str]:
        rows = self.db.query(Meal.category).distinct().order_by(Meal.category).all()
        return [row[0] for row in rows]
