# storefront/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from storefront.data.database import Base, engine
from storefront.data.seed import seed
from storefront.api.routers import auth, carts, checkout, health, orders, products
from storefront.utils.logging import get_logger

# import modeli przed create_all, zeby byly w Base.metadata
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)
    seed()
    logger.info("Database ready")


def create_app(init: bool = True) -> FastAPI:
    if init:
        init_db()

    app = FastAPI(
        title="Storefront API",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)

    return app


def run():
    uvicorn.run("storefront.main:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
