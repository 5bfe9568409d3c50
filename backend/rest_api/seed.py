"""
Seed data for development and demos.
Creates a demo restaurant with recipes, inventory, a supplier and tables.
"""

from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import InventoryItem, Recipe, Supplier, Table, User, utc_now
from shared.config.constants import SubscriptionPlan, SubscriptionStatus
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.security.password import hash_password

logger = get_logger(__name__)


DEMO_EMAIL = "demo@recipemaster.com"
DEMO_PASSWORD = "password123"

DEMO_RECIPES = [
    {
        "name": "Butter Chicken",
        "description": "Creamy tomato-based curry with tender chicken pieces",
        "category": "main-course",
        "prep_time": 30,
        "cook_time": 45,
        "servings": 4,
        "difficulty": "medium",
        "cost_per_serving": 150,
        "instructions": [
            {"id": 1, "instruction": "Marinate chicken in yogurt and spices for 30 minutes", "timer": 30},
            {"id": 2, "instruction": "Cook chicken in a pan until golden brown", "timer": 15},
            {"id": 3, "instruction": "Prepare tomato-based sauce with cream", "timer": 20},
            {"id": 4, "instruction": "Combine chicken with sauce and simmer", "timer": 10},
        ],
        "ingredients": [
            {"name": "Chicken", "quantity": 500, "unit": "grams"},
            {"name": "Tomatoes", "quantity": 400, "unit": "grams"},
            {"name": "Cream", "quantity": 200, "unit": "ml"},
            {"name": "Spices", "quantity": 1, "unit": "set"},
        ],
        "tags": ["curry", "signature"],
    },
    {
        "name": "Masala Dosa",
        "description": "Crispy South Indian crepe with spiced potato filling",
        "category": "main-course",
        "prep_time": 480,
        "cook_time": 30,
        "servings": 4,
        "difficulty": "hard",
        "cost_per_serving": 80,
        "instructions": [
            {"id": 1, "instruction": "Soak rice and dal for 4-6 hours", "timer": 360},
            {"id": 2, "instruction": "Grind and ferment batter overnight", "timer": 480},
            {"id": 3, "instruction": "Prepare potato masala", "timer": 20},
            {"id": 4, "instruction": "Make crispy dosa and add filling", "timer": 10},
        ],
        "ingredients": [
            {"name": "Rice", "quantity": 300, "unit": "grams"},
            {"name": "Urad Dal", "quantity": 100, "unit": "grams"},
            {"name": "Potatoes", "quantity": 500, "unit": "grams"},
            {"name": "Spices", "quantity": 1, "unit": "set"},
        ],
        "tags": ["vegetarian"],
    },
]

DEMO_INVENTORY = [
    {"name": "Chicken Breast", "category": "meat", "current_stock": 5, "unit": "kg",
     "min_stock": 2, "cost_per_unit": 300, "supplier": "Premium Meats"},
    {"name": "Basmati Rice", "category": "grains", "current_stock": 25, "unit": "kg",
     "min_stock": 10, "cost_per_unit": 120, "supplier": "Grain Suppliers Ltd"},
    {"name": "Tomatoes", "category": "vegetables", "current_stock": 8, "unit": "kg",
     "min_stock": 5, "cost_per_unit": 40, "supplier": "Fresh Vegetables Co"},
]

# (table_number, capacity)
DEMO_TABLES = [(1, 2), (2, 4), (3, 6), (4, 2), (5, 4)]


def seed_demo_account(db: Session) -> User:
    """
    Create the demo account if it does not exist.
    Idempotent: returns the existing account otherwise.
    """
    account = db.scalar(select(User).where(User.email == DEMO_EMAIL))
    if account:
        logger.info("Demo account already exists, skipping")
        return account

    account = User(
        email=DEMO_EMAIL,
        password=hash_password(DEMO_PASSWORD),
        first_name="Demo",
        last_name="User",
        restaurant_name="Demo Restaurant",
        subscription_plan=SubscriptionPlan.FREE.value,
        subscription_status=SubscriptionStatus.ACTIVE,
        subscription_expires_at=utc_now() + timedelta(days=settings.trial_days),
    )
    db.add(account)
    db.flush()
    logger.info("Demo account created", user_id=account.id)
    return account


def seed_demo_content(db: Session, tenant_id: int) -> None:
    """Sample recipes, inventory, supplier and tables, each only if the tenant has none."""
    if not db.scalar(select(Recipe.id).where(Recipe.tenant_id == tenant_id).limit(1)):
        db.add_all(Recipe(tenant_id=tenant_id, **data) for data in DEMO_RECIPES)
        logger.info("Sample recipes created", count=len(DEMO_RECIPES))

    if not db.scalar(select(InventoryItem.id).where(InventoryItem.tenant_id == tenant_id).limit(1)):
        db.add_all(InventoryItem(tenant_id=tenant_id, **data) for data in DEMO_INVENTORY)
        logger.info("Sample inventory created", count=len(DEMO_INVENTORY))

    if not db.scalar(select(Supplier.id).where(Supplier.tenant_id == tenant_id).limit(1)):
        db.add(Supplier(
            tenant_id=tenant_id,
            name="Premium Meats",
            contact_person="Ravi Kumar",
            phone="+1-555-0100",
            payment_terms="Net 30",
            delivery_schedule="Mon, Thu",
        ))

    if not db.scalar(select(Table.id).where(Table.tenant_id == tenant_id).limit(1)):
        db.add_all(
            Table(tenant_id=tenant_id, table_number=number, capacity=capacity)
            for number, capacity in DEMO_TABLES
        )
        logger.info("Sample tables created", count=len(DEMO_TABLES))


def seed(db: Session) -> User:
    """
    Seed the demo restaurant.
    Safe to run repeatedly.
    """
    account = seed_demo_account(db)
    seed_demo_content(db, account.id)
    safe_commit(db)
    logger.info("Demo data ready", email=DEMO_EMAIL)
    return account
