"""Tests for cart subtotal, shipping, tax and order total."""
from decimal import Decimal

from storefront.domain.schemas import CartLineItem
from storefront.services import cart_totals


def item(price, quantity=1, product_id=1):
    return CartLineItem(product_id=product_id, name=f"Product {product_id}",
                        unit_price=Decimal(str(price)), quantity=quantity)


def test_subtotal_empty_cart_is_zero():
    assert cart_totals.subtotal([]) == 0


def test_subtotal_sums_price_times_quantity():
    items = [item("29.99", 2), item("9.50", 3, product_id=2)]
    assert cart_totals.subtotal(items) == Decimal("88.48")


def test_shipping_threshold_is_strict():
    assert cart_totals.shipping_fee(Decimal("50.00")) == 10
    assert cart_totals.shipping_fee(Decimal("50.01")) == 0
    assert cart_totals.shipping_fee(0) == 10


def test_shipping_accepts_float_without_drift():
    assert cart_totals.shipping_fee(50.0) == 10
    assert cart_totals.shipping_fee(50.01) == 0


def test_tax_is_ten_percent():
    assert cart_totals.tax(Decimal("30")) == Decimal("3")
    assert cart_totals.tax(Decimal("59.98")) == Decimal("5.998")


def test_order_total_under_free_shipping():
    assert cart_totals.order_total([item(30)]) == 43


def test_order_total_over_free_shipping():
    assert cart_totals.order_total([item("29.99", 2)]) == Decimal("65.978")


def test_summarize_invariant():
    totals = cart_totals.summarize([item("0.10"), item("0.20", product_id=2)])
    assert totals.subtotal == Decimal("0.30")
    assert totals.total == totals.subtotal + totals.shipping_fee + totals.tax
    assert totals.total == Decimal("10.33")


def test_functions_are_idempotent():
    items = [item("19.99", 3)]
    assert cart_totals.summarize(items) == cart_totals.summarize(items)
    assert cart_totals.order_total(items) == cart_totals.order_total(items)


def test_item_count():
    assert cart_totals.item_count([item(1, 2), item(1, 5, product_id=2)]) == 7
    assert cart_totals.item_count([]) == 0
