from datetime import datetime, timezone
from typing import List, Tuple
from sqlalchemy.orm import Session
import logging

from domain.models import Subscription, User
from domain.enums import UserRole
from domain.schemas.subscription_schemas import SubscriptionCreate
from repositories import MealRepository, SubscriptionRepository
from app.exceptions import NotFoundError, ForbiddenError, ServiceValidationError

logger = logging.getLogger("campusfood.subscriptions")


class SubscriptionService:
    """Weekly meal plan subscriptions"""

    @staticmethod
    def subscribe(db: Session, payload: SubscriptionCreate, user: User) -> Subscription:
        if user.role != UserRole.CUSTOMER:
            raise ForbiddenError("Only customers can subscribe to meal plans")

        meal_ids = set(payload.meal_ids)
        meals = MealRepository(db).get_by_ids(list(meal_ids))
        if len(meals) != len(meal_ids):
            missing = sorted(meal_ids - {meal.id for meal in meals})
            raise ServiceValidationError(
                f"Meals not found: {', '.join(str(m) for m in missing)}"
            )

        subscription = Subscription(
            subscriber_id=user.id,
            plan_name=payload.plan_name,
            monthly_fee=payload.monthly_fee,
            meals_per_week=payload.meals_per_week,
            is_active=True,
            start_date=payload.start_date or datetime.now(timezone.utc),
            included_meals=meals,
        )
        subscription = SubscriptionRepository(db).create(subscription)
        logger.info(
            f"subscription_created subscription_id={subscription.id} "
            f"user_id={user.id} meals={len(meals)}"
        )
        return subscription

    @staticmethod
    def list_for_user(db: Session, user: User) -> List[Subscription]:
        return SubscriptionRepository(db).get_by_subscriber(user.id)

    @staticmethod
    def list_all(db: Session, page: int, limit: int) -> Tuple[List[Subscription], int]:
        return SubscriptionRepository(db).list_page(page, limit)

    @staticmethod
    def cancel(db: Session, subscription_id: int, user: User) -> Subscription:
        """Deactivate a subscription; the row is kept for history."""
        repo = SubscriptionRepository(db)
        subscription = repo.get_by_id(subscription_id)
        if not subscription:
            raise NotFoundError(f"Subscription {subscription_id} not found")
        if user.role != UserRole.ADMIN and subscription.subscriber_id != user.id:
            raise ForbiddenError("You can only cancel your own subscriptions")
        if not subscription.is_active:
            raise ServiceValidationError("Subscription is already inactive")

        subscription.is_active = False
        subscription.end_date = datetime.now(timezone.utc)
        subscription = repo.update(subscription)
        logger.info(
            f"subscription_cancelled subscription_id={subscription_id} by_user={user.id}"
        )
        return subscription
