"""Tests for assembling an order from cart, address and payment."""
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from storefront.domain.errors import EmptyCartError, InvalidCardNumber, InsufficientFunds
from storefront.domain.schemas import CardNetwork, Order, PaymentInput
from storefront.services.order_assembler import OrderAssembler

from conftest import FIXED_NOW, make_simulator


def test_end_to_end_order(simulator, cart_items, shipping_address, visa_payment):
    assembler = OrderAssembler(simulator, clock=lambda: FIXED_NOW, id_factory=lambda: "ORD-1")

    order = assembler.place_order(cart_items, shipping_address, visa_payment)

    assert order.order_id == "ORD-1"
    assert order.subtotal == Decimal("59.98")
    assert order.shipping_fee == 0
    assert order.tax == Decimal("5.998")
    assert order.total == Decimal("65.978")
    assert order.total == order.subtotal + order.shipping_fee + order.tax
    assert order.transaction.amount_charged == order.total
    assert order.transaction.card_network == CardNetwork.VISA
    assert order.transaction.last_four_digits == "4242"
    assert order.line_items == cart_items
    assert order.created_at == FIXED_NOW


def test_empty_cart_rejected_before_payment(shipping_address, visa_payment):
    payments = MagicMock()
    assembler = OrderAssembler(payments)

    with pytest.raises(EmptyCartError):
        assembler.place_order([], shipping_address, visa_payment)

    payments.process.assert_not_called()


def test_invalid_card_propagates_and_no_order(simulator, cart_items, shipping_address):
    ids = MagicMock(return_value="ORD-X")
    assembler = OrderAssembler(simulator, id_factory=ids)
    bad = PaymentInput(card_number="1234567812345678", cardholder_name="Jane Doe",
                       expiry_date="12/30", cvv="123")

    with pytest.raises(InvalidCardNumber):
        assembler.place_order(cart_items, shipping_address, bad)

    ids.assert_not_called()


def test_decline_propagates_unchanged(cart_items, shipping_address, visa_payment):
    assembler = OrderAssembler(make_simulator(value=0.0, choice_index=1))
    with pytest.raises(InsufficientFunds):
        assembler.place_order(cart_items, shipping_address, visa_payment)


def test_payment_charged_with_order_total(cart_items, shipping_address, visa_payment):
    payments = MagicMock(wraps=make_simulator())
    OrderAssembler(payments).place_order(cart_items, shipping_address, visa_payment)
    payments.process.assert_called_once_with(visa_payment, Decimal("65.978"))


def test_generated_order_ids_differ(simulator, cart_items, shipping_address, visa_payment):
    assembler = OrderAssembler(simulator)
    a = assembler.place_order(cart_items, shipping_address, visa_payment)
    b = assembler.place_order(cart_items, shipping_address, visa_payment)
    assert a.order_id != b.order_id
    assert a.order_id.startswith("ORD-")


def test_order_is_immutable(simulator, cart_items, shipping_address, visa_payment):
    order = OrderAssembler(simulator).place_order(cart_items, shipping_address, visa_payment)
    with pytest.raises(ValidationError):
        order.total = Decimal("1")


def test_order_rejects_inconsistent_totals(simulator, cart_items, shipping_address, visa_payment):
    order = OrderAssembler(simulator).place_order(cart_items, shipping_address, visa_payment)
    data = order.model_dump()
    data["total"] = Decimal("1")
    with pytest.raises(ValidationError):
        Order(**data)
