"""
Demo catalog seeding.

Seeds an admin and a customer account, two vendors and their menus. Runs only
while the meal table is empty.
"""

from decimal import Decimal
from sqlalchemy.orm import Session
import logging

from domain.models import User, Vendor, Meal
from domain.enums import UserRole
from repositories import MealRepository, UserRepository
from app.security import hash_password

logger = logging.getLogger("campusfood.seed")

ALREADY_SEEDED = "Database already seeded"
SEEDED = "Database seeded successfully"

SEED_USERS = [
    {
        "email": "admin@campusfoods.com",
        "password": "admin123",
        "name": "Admin User",
        "phone_number": "237612345678",
        "role": UserRole.ADMIN,
    },
    {
        "email": "test@example.com",
        "password": "test123",
        "name": "Test User",
        "phone_number": "237612345679",
        "role": UserRole.CUSTOMER,
    },
]

SEED_VENDORS = {
    "mama_africa": {
        "name": "Mama Africa Kitchen",
        "description": "Authentic Cameroonian cuisine with a modern twist",
        "address": "University Campus, Building A",
        "logo_url": "/images/vendor-placeholder.svg",
        "phone_number": "237612345680",
        "email": "contact@mamaafrica.com",
    },
    "chez_pierre": {
        "name": "Chez Pierre",
        "description": "Delicious local food with French influence",
        "address": "University Campus, Building B",
        "logo_url": "/images/vendor-placeholder.svg",
        "phone_number": "237612345681",
        "email": "contact@chezpierre.com",
    },
}

# (vendor key, name, description, price, image, category, featured)
SEED_MEALS = [
    ("mama_africa", "Ndolé",
     "Traditional Cameroonian dish made with stewed nuts, ndolé leaves, and fish or beef.",
     "3500", "/meals/ndole.jpg", "Traditional", True),
    ("chez_pierre", "Poulet DG",
     "Directeur Général chicken - a delicious dish with chicken, plantains, and vegetables in a rich sauce.",
     "4200", "/meals/grilled-chicken.jpg", "Traditional", True),
    ("mama_africa", "Egusi",
     "A nutritious vegetable soup made with finely shredded eru leaves, waterleaf, and meat or fish.",
     "3000", "/meals/egusi.jpg", "Traditional", True),
    ("chez_pierre", "Jollof Rice",
     "Spicy rice dish cooked with tomatoes, peppers, and aromatic spices, served with grilled chicken.",
     "3200", "/meals/jollof-rice.jpg", "Rice", True),
    ("mama_africa", "Borny fish",
     "Borny fish with boboloh, peppers, and aromatic spices.",
     "3200", "/meals/borny-fish.jpg", "Fish", True),
    ("mama_africa", "Okok",
     "Okok with boboloh, peppers, and aromatic spices.",
     "3200", "/meals/okok.jpg", "Traditional", False),
    ("mama_africa", "Pile",
     "Pile with potatoes and beans and peppers.",
     "3000", "/meals/pile.jpg", "Traditional", True),
    ("chez_pierre", "Yam",
     "Yam with bitter leaves and peppers.",
     "3200", "/meals/yam.jpg", "Traditional", False),
]


class SeedService:
    @staticmethod
    def seed(db: Session) -> str:
        """Insert the demo data in one transaction; returns a status message."""
        if MealRepository(db).count() > 0:
            logger.info("seed_skipped reason=meals_present")
            return ALREADY_SEEDED

        try:
            user_repo = UserRepository(db)
            for account in SEED_USERS:
                if user_repo.get_by_email(account["email"]):
                    continue
                db.add(
                    User(
                        email=account["email"],
                        password_hash=hash_password(account["password"]),
                        name=account["name"],
                        phone_number=account["phone_number"],
                        role=account["role"],
                    )
                )

            vendors = {
                key: Vendor(is_active=True, **fields)
                for key, fields in SEED_VENDORS.items()
            }
            db.add_all(vendors.values())

            for vendor_key, name, description, price, image, category, featured in SEED_MEALS:
                db.add(
                    Meal(
                        vendor=vendors[vendor_key],
                        name=name,
                        description=description,
                        price=Decimal(price),
                        image_url=image,
                        category=category,
                        is_available=True,
                        is_featured=featured,
                    )
                )
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("seed_failed")
            raise

        logger.info(
            f"seed_completed vendors={len(SEED_VENDORS)} meals={len(SEED_MEALS)}"
        )
        return SEEDED
