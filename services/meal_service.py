from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging

from domain.models import Meal, User
from domain.enums import UserRole
from domain.schemas.catalog_schemas import MealCreate, MealUpdate, MealFilter
from repositories import MealRepository, VendorRepository
from app.exceptions import NotFoundError, ForbiddenError, ServiceValidationError

logger = logging.getLogger("campusfood.meals")


class MealService:
    """Business logic for the meal catalog"""

    @staticmethod
    def _ensure_can_manage(user: User, vendor_id: int) -> None:
        """Vendors may only manage meals of the vendor they operate."""
        if user.role == UserRole.ADMIN:
            return
        if user.role == UserRole.VENDOR and user.vendor_id == vendor_id:
            return
        logger.warning(
            f"meal_manage_denied user_id={user.id} vendor_id={vendor_id}"
        )
        raise ForbiddenError("You can only manage meals of your own vendor")

    @staticmethod
    def list_meals(
        db: Session, page: int, limit: int, filters: Optional[MealFilter] = None
    ) -> Tuple[List[Meal], int]:
        return MealRepository(db).list_page(page, limit, filters)

    @staticmethod
    def list_by_vendor(
        db: Session, vendor_id: int, page: int, limit: int
    ) -> Tuple[List[Meal], int]:
        if not VendorRepository(db).exists(vendor_id):
            raise NotFoundError(f"Vendor {vendor_id} not found")
        return MealRepository(db).list_by_vendor(vendor_id, page, limit)

    @staticmethod
    def get_categories(db: Session) -> List[str]:
        return MealRepository(db).get_categories()

    @staticmethod
    def get_meal(db: Session, meal_id: int) -> Meal:
        meal = MealRepository(db).get_by_id(meal_id)
        if not meal:
            raise NotFoundError(f"Meal {meal_id} not found")
        return meal

    @staticmethod
    def create_meal(db: Session, payload: MealCreate, user: User) -> Meal:
        """
        Add a meal to a vendor's menu.

        Raises:
            ServiceValidationError: If the vendor does not exist
            ForbiddenError: If a VENDOR user targets another vendor
        """
        if not VendorRepository(db).exists(payload.vendor_id):
            raise ServiceValidationError(f"Vendor {payload.vendor_id} does not exist")
        MealService._ensure_can_manage(user, payload.vendor_id)

        data = payload.model_dump()
        data["is_available"] = True if data["is_available"] is None else data["is_available"]
        data["is_featured"] = bool(data["is_featured"])
        meal = MealRepository(db).create(Meal(**data))
        logger.info(
            f"meal_created meal_id={meal.id} vendor_id={meal.vendor_id} price={meal.price}"
        )
        return meal

    @staticmethod
    def update_meal(db: Session, meal_id: int, payload: MealUpdate, user: User) -> Meal:
        meal = MealService.get_meal(db, meal_id)
        MealService._ensure_can_manage(user, meal.vendor_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field != "image_url":
                continue
            setattr(meal, field, value)

        meal = MealRepository(db).update(meal)
        logger.info(f"meal_updated meal_id={meal_id}")
        return meal

    @staticmethod
    def set_availability(db: Session, meal_id: int, is_available: bool, user: User) -> Meal:
        meal = MealService.get_meal(db, meal_id)
        MealService._ensure_can_manage(user, meal.vendor_id)

        meal.is_available = is_available
        meal = MealRepository(db).update(meal)
        logger.info(f"meal_availability meal_id={meal_id} is_available={is_available}")
        return meal

    @staticmethod
    def delete_meal(db: Session, meal_id: int, user: User) -> None:
        meal = MealService.get_meal(db, meal_id)
        MealService._ensure_can_manage(user, meal.vendor_id)

        MealRepository(db).delete(meal_id)
        logger.info(f"meal_deleted meal_id={meal_id}")
