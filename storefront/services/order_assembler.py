# storefront/services/order_assembler.py
import uuid
from datetime import datetime, timezone
from typing import Callable, Sequence

from storefront.domain.errors import EmptyCartError
from storefront.domain.schemas import CartLineItem, Order, PaymentInput, ShippingAddress
from storefront.services import cart_totals
from storefront.services.payment_simulator import PaymentSimulator
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def generate_order_id() -> str:
    return f"ORD-{uuid.uuid4().hex[:12].upper()}"


class OrderAssembler:
    """
    Use Case: zlozenie zamowienia z koszyka.

    1. Odrzuca pusty koszyk (EmptyCartError) zanim dotknie platnosci
    2. Liczy subtotal / wysylke / podatek / total
    3. Obciaza karte na kwote total
    4. Dopiero po udanej platnosci buduje Order

    Bledy platnosci przechodza dalej bez zmian, bez retry.
    Nic tu nie zapisuje do bazy - tym zajmuje sie OrderService.
    """

    def __init__(
        self,
        payment_simulator: PaymentSimulator,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] = generate_order_id,
    ):
        self.payments = payment_simulator
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.id_factory = id_factory

    def place_order(
        self,
        cart_items: Sequence[CartLineItem],
        shipping_address: ShippingAddress,
        payment: PaymentInput,
    ) -> Order:
        items = list(cart_items)
        if not items:
            raise EmptyCartError()

        totals = cart_totals.summarize(items)
        transaction = self.payments.process(payment, totals.total)

        order = Order(
            order_id=self.id_factory(),
            line_items=items,
            shipping_address=shipping_address,
            transaction=transaction,
            subtotal=totals.subtotal,
            shipping_fee=totals.shipping_fee,
            tax=totals.tax,
            total=totals.total,
            created_at=self.clock(),
        )

        logger.info(
            f"Order {order.order_id} assembled: {len(items)} lines, total {order.total}, "
            f"transaction {transaction.transaction_id}"
        )
        return order
