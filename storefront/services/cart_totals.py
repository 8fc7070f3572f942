# storefront/services/cart_totals.py
"""Sumy koszyka: subtotal, wysylka, podatek, total. Czyste funkcje na Decimal."""
from decimal import Decimal
from typing import Iterable

from storefront.domain.schemas import CartLineItem, CartTotals
from storefront.utils.settings import FREE_SHIPPING_THRESHOLD, FLAT_SHIPPING_FEE, TAX_RATE

ZERO = Decimal("0")


def to_amount(value) -> Decimal:
    """float idzie przez str, zeby nie przeniesc bledu reprezentacji binarnej."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def subtotal(items: Iterable[CartLineItem]) -> Decimal:
    return sum((i.unit_price * i.quantity for i in items), ZERO)


def shipping_fee(subtotal) -> Decimal:
    #prog scisly: dokladnie 50.00 jeszcze placi za wysylke
    return ZERO if to_amount(subtotal) > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE


def tax(subtotal) -> Decimal:
    return to_amount(subtotal) * TAX_RATE


def summarize(items: Iterable[CartLineItem]) -> CartTotals:
    sub = subtotal(items)
    fee = shipping_fee(sub)
    vat = tax(sub)
    return CartTotals(subtotal=sub, shipping_fee=fee, tax=vat, total=sub + fee + vat)


def order_total(items: Iterable[CartLineItem]) -> Decimal:
    return summarize(items).total


def item_count(items: Iterable[CartLineItem]) -> int:
    return sum(i.quantity for i in items)
