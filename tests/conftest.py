"""Shared test fixtures."""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_ALWAYS_EAGER"] = "true"
os.environ["CATALOG_SERVICE_URL"] = ""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api.routers.checkout import get_payment_simulator
from storefront.data.database import Base, get_db
from storefront.data.models.product import ProductModel
from storefront.data.seed import seed_admin
from storefront.domain.schemas import CartLineItem, PaymentInput, ShippingAddress
from storefront.main import create_app
from storefront.services.payment_simulator import PaymentSimulator

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeRandom:
    """Deterministyczny zamiennik random.Random dla symulatora platnosci."""

    def __init__(self, value: float = 0.99, choice_index: int = 0):
        self.value = value
        self.choice_index = choice_index

    def random(self):
        return self.value

    def randint(self, a, b):
        return a

    def choice(self, seq):
        return seq[self.choice_index % len(seq)]


def make_simulator(value: float = 0.99, choice_index: int = 0, **kwargs) -> PaymentSimulator:
    return PaymentSimulator(
        rng=FakeRandom(value, choice_index),
        delay=lambda seconds: None,
        clock=lambda: FIXED_NOW,
        **kwargs,
    )


@pytest.fixture
def simulator():
    return make_simulator()


@pytest.fixture
def shipping_address():
    return ShippingAddress(
        first_name="Jane",
        last_name="Doe",
        email="jane.doe@storefront.io",
        phone="415-555-0100",
        street="123 Main Street",
        city="San Francisco",
        state="CA",
        zip_code="94102",
        country="United States",
    )


@pytest.fixture
def visa_payment():
    return PaymentInput(
        card_number="4242 4242 4242 4242",
        cardholder_name="Jane Doe",
        expiry_date="12/30",
        cvv="123",
    )


@pytest.fixture
def cart_items():
    return [CartLineItem(product_id=1, name="Wireless Headphones", unit_price=Decimal("29.99"), quantity=2)]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def products(db):
    items = [
        ProductModel(name="Wireless Headphones", price=Decimal("29.99"), category="Electronics", stock=50),
        ProductModel(name="Cotton Hoodie", price=Decimal("49.99"), category="Clothing", stock=30),
        ProductModel(name="Ceramic Mug", price=Decimal("9.50"), category="Home", stock=120),
    ]
    db.add_all(items)
    db.commit()
    for p in items:
        db.refresh(p)
    return items


@pytest.fixture
def payment_rng():
    """Zmieniaj value/choice_index w tescie, zeby wymusic odrzucenie platnosci."""
    return FakeRandom()


@pytest.fixture
def app(session_factory, payment_rng):
    app = create_app(init=False)

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_payment_simulator] = lambda: PaymentSimulator(
        rng=payment_rng,
        delay=lambda seconds: None,
        clock=lambda: FIXED_NOW,
    )
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(client, email="jane.doe@storefront.io", password="secret123", name="Jane Doe"):
    resp = client.post("/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer(client):
    data = register(client)
    return {"user": data["user"], "headers": auth_header(data["token"])}


@pytest.fixture
def admin(client, db):
    seed_admin(db, email="admin@storefront.io", password="adminpass")
    resp = client.post("/auth/login", json={"email": "admin@storefront.io", "password": "adminpass"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    return {"user": data["user"], "headers": auth_header(data["token"])}
