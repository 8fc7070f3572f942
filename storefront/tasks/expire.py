# storefront/tasks/expire.py
from datetime import datetime, timezone

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.data.models.cart import CartModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def expire_carts(db, now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)

    carts = (
        db.query(CartModel)
        .filter(
            CartModel.status == "ACTIVE",
            CartModel.expires_at < now,
        )
        .all()
    )

    logger.info(f"Found {len(carts)} carts to expire")

    for cart in carts:
        cart.status = "EXPIRED"
        cart.version += 1

    db.commit()
    return len(carts)


@celery_app.task(name="storefront.tasks.expire.expire_carts_task")
def expire_carts_task():
    logger.info("Expire carts task started")

    db = SessionLocal()
    try:
        return expire_carts(db)
    finally:
        db.close()
