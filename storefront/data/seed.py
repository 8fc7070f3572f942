# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.security import hash_password
from storefront.utils.settings import ADMIN_EMAIL, ADMIN_PASSWORD
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Wireless Headphones",
        "description": "Over-ear headphones with active noise cancelling.",
        "price": Decimal("29.99"),
        "category": "Electronics",
        "image": "https://via.placeholder.com/300",
        "stock": 50,
        "featured": True,
    },
    {
        "name": "Cotton Hoodie",
        "description": "Soft hoodie for everyday wear.",
        "price": Decimal("49.99"),
        "category": "Clothing",
        "image": "https://via.placeholder.com/300",
        "stock": 30,
        "featured": False,
    },
    {
        "name": "Mechanical Keyboard",
        "description": "Hot-swappable switches, RGB backlight.",
        "price": Decimal("89.00"),
        "category": "Electronics",
        "image": "https://via.placeholder.com/300",
        "stock": 15,
        "featured": True,
    },
    {
        "name": "Ceramic Mug",
        "description": "350 ml, dishwasher safe.",
        "price": Decimal("9.50"),
        "category": "Home",
        "image": "https://via.placeholder.com/300",
        "stock": 120,
        "featured": False,
    },
]


def seed_products(db) -> int:
    # not forcing: only seed if empty
    repo = ProductRepo(db)
    if repo.count():
        return 0
    for data in DEMO_PRODUCTS:
        db.add(ProductModel(**data))
    db.commit()
    logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
    return len(DEMO_PRODUCTS)


def seed_admin(db, email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD) -> bool:
    if not email or not password:
        return False
    repo = UserRepo(db)
    if repo.get_by_email(email):
        return False
    repo.create_user(
        UserModel(name="Admin", email=email.lower(), password_hash=hash_password(password), role="admin")
    )
    logger.info(f"Admin account {email} created")
    return True


def seed():
    db = SessionLocal()
    try:
        seed_admin(db)
        return seed_products(db)
    finally:
        db.close()
