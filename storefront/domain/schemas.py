# storefront/domain/schemas.py
import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")
OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]


class CardNetwork(str, Enum):
    VISA = "visa"
    MASTERCARD = "mastercard"
    AMEX = "amex"
    DISCOVER = "discover"
    DINERS = "diners"
    JCB = "jcb"
    UNKNOWN = "unknown"


# =====================================================
# CHECKOUT CORE
# =====================================================
class CartLineItem(BaseModel):
    """Pozycja koszyka w chwili checkoutu (snapshot ceny)."""

    product_id: int = Field(..., gt=0)
    name: str
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)
    quantity: int = Field(..., gt=0)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class ShippingAddress(BaseModel):
    """Adres dostawy - wszystkie pola wymagane."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _email_format(cls, v: str) -> str:
        if not EMAIL_RE.match(v):
            raise ValueError("Email is invalid")
        return v


class PaymentInput(BaseModel):
    """
    Dane karty - tylko na czas jednej proby platnosci, nigdy nie zapisywane.
    Bez walidacji tutaj: formaty sprawdza symulator, zeby zwrocic typowany blad.
    """

    card_number: str = Field(..., repr=False)
    cardholder_name: str
    expiry_date: str = Field(..., description="MM/YY")
    cvv: str = Field(..., repr=False)


class TransactionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    transaction_id: str
    amount_charged: Decimal
    card_network: CardNetwork
    last_four_digits: str
    processed_at: datetime


class CartTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    shipping_fee: Decimal
    tax: Decimal
    total: Decimal


class Order(BaseModel):
    """Zamowienie tworzone raz, po udanej platnosci. Niemutowalne."""

    model_config = ConfigDict(frozen=True)

    order_id: str
    line_items: List[CartLineItem]
    shipping_address: ShippingAddress
    transaction: TransactionResult
    subtotal: Decimal
    shipping_fee: Decimal
    tax: Decimal
    total: Decimal
    created_at: datetime

    @model_validator(mode="after")
    def _check_totals(self):
        expected_subtotal = sum((i.line_total for i in self.line_items), Decimal("0"))
        if self.subtotal != expected_subtotal:
            raise ValueError("subtotal does not match line items")
        if self.total != self.subtotal + self.shipping_fee + self.tax:
            raise ValueError("total must equal subtotal + shipping_fee + tax")
        return self


# =====================================================
# API - KATALOG
# =====================================================
class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: Decimal = Field(..., ge=0, decimal_places=2)
    category: str = Field(..., min_length=1)
    image: str | None = None
    stock: int = Field(0, ge=0)
    featured: bool = False


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, decimal_places=2)
    category: str | None = None
    image: str | None = None
    stock: int | None = Field(None, ge=0)
    featured: bool | None = None


class ProductOut(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    category: str
    image: str | None = None
    stock: int
    featured: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# API - KOSZYK
# =====================================================
class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(1, gt=0, description="Ilość produktu (musi być > 0)")


class QuantityIn(BaseModel):
    """Ilosc <= 0 usuwa pozycje z koszyka."""

    quantity: int


class CartOut(BaseModel):
    cart_id: int
    user_id: int
    status: str
    items: List[CartLineItem]
    item_count: int
    subtotal: Decimal
    shipping_fee: Decimal
    tax: Decimal
    total: Decimal
    expires_at: datetime | None = None


# =====================================================
# API - CHECKOUT / ZAMOWIENIA
# =====================================================
class CheckoutIn(BaseModel):
    shipping_address: ShippingAddress
    payment: PaymentInput


class PaymentValidationOut(BaseModel):
    is_valid: bool
    errors: dict[str, str]
    card_network: CardNetwork
    #tylko gdy numer przeszedl Luhna
    masked_card_number: str | None = None


class SampleCard(BaseModel):
    number: str
    type: str
    description: str


class SampleCardsOut(BaseModel):
    success: List[SampleCard]
    decline: List[SampleCard]


class OrderOut(BaseModel):
    id: str
    user_id: int
    status: str
    line_items: List[CartLineItem]
    shipping_address: ShippingAddress
    transaction: TransactionResult
    subtotal: Decimal
    shipping_fee: Decimal
    tax: Decimal
    total: Decimal
    created_at: datetime
    updated_at: datetime | None = None


class OrderStatusIn(BaseModel):
    status: OrderStatus


# =====================================================
# API - UZYTKOWNICY
# =====================================================
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Imię użytkownika")
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class ChangePasswordIn(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class TokenOut(BaseModel):
    token: str
    user: UserRead
