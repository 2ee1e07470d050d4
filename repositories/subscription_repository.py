"""
Subscription Repository - Data access for meal plan subscriptions
"""

from typing import List, Tuple
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Subscription


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for subscription data access"""

    def __init__(self, db: Session):
        super().__init__(db, Subscription)

    def get_by_subscriber(self, subscriber_id: int) -> List[Subscription]:
        return (
            self.db.query(Subscription)
            .options(selectinload(Subscription.included_meals))
            .filter(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
            .all()
        )

    def list_page(self, page: int, limit: int) -> Tuple[List[Subscription], int]:
        query = (
            self.db.query(Subscription)
            .options(selectinload(Subscription.included_meals))
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        return self.paginate(query, page, limit)
