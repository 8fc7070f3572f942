# storefront/utils/settings.py
import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_ALWAYS_EAGER = os.getenv("CELERY_ALWAYS_EAGER", "false").lower() == "true"
# pusty = katalog czytany lokalnie z bazy
CATALOG_SERVICE_URL = os.getenv("CATALOG_SERVICE_URL", "")

JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", 7))

CART_TTL_SECONDS = int(os.getenv("CART_TTL_SECONDS", 24*60*60))

FREE_SHIPPING_THRESHOLD = Decimal(os.getenv("FREE_SHIPPING_THRESHOLD", "50"))
FLAT_SHIPPING_FEE = Decimal(os.getenv("FLAT_SHIPPING_FEE", "10"))
TAX_RATE = Decimal(os.getenv("TAX_RATE", "0.10"))

PAYMENT_DECLINE_RATE = float(os.getenv("PAYMENT_DECLINE_RATE", 0.05))
PAYMENT_DELAY_MIN_MS = int(os.getenv("PAYMENT_DELAY_MIN_MS", 1000))
PAYMENT_DELAY_MAX_MS = int(os.getenv("PAYMENT_DELAY_MAX_MS", 3000))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# opcjonalne konto admina tworzone przy starcie
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
