from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, JSON
from datetime import datetime, timezone

from storefront.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    status = Column(String, nullable=False, default="pending")  # pending, processing, shipped, delivered, cancelled

    #dokumenty JSON: pozycje, adres, transakcja (bez surowych danych karty)
    line_items = Column(JSON, nullable=False)
    shipping_address = Column(JSON, nullable=False)
    transaction = Column(JSON, nullable=False)

    #podatek 10% od kwoty z groszami ma 3 miejsca po przecinku
    subtotal = Column(Numeric(12, 4), nullable=False)
    shipping_fee = Column(Numeric(12, 4), nullable=False)
    tax = Column(Numeric(12, 4), nullable=False)
    total = Column(Numeric(12, 4), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)
