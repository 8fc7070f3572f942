# storefront/services/payment_simulator.py
import itertools
import random
import string
import time
from datetime import datetime, timezone
from decimal import InvalidOperation
from typing import Callable

from storefront.domain.errors import (
    DECLINE_REASONS,
    CardExpired,
    InvalidAmount,
    InvalidCardholderName,
    InvalidCardNumber,
    InvalidCVV,
)
from storefront.domain.schemas import PaymentInput, TransactionResult
from storefront.services import card_validator
from storefront.services.cart_totals import to_amount
from storefront.utils.logging import get_logger
from storefront.utils.settings import (
    PAYMENT_DECLINE_RATE,
    PAYMENT_DELAY_MIN_MS,
    PAYMENT_DELAY_MAX_MS,
)

logger = get_logger(__name__)

_BASE36 = string.digits + string.ascii_uppercase
_txn_counter = itertools.count(1)


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_BASE36[r])
    return "".join(reversed(out))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentSimulator:
    """
    Symulowana bramka platnosci (jak Stripe/PayPal, tylko lokalnie).

    Kolejnosc walidacji jest stala: kwota -> numer karty -> data waznosci
    -> CVV -> posiadacz karty -> losowe odrzucenie. Kazdy blad to osobna klasa
    z storefront.domain.errors.

    rng, delay i clock sa wstrzykiwane - w testach podajemy seedowany
    random.Random, delay bez czekania i staly zegar.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        delay: Callable[[float], None] | None = None,
        clock: Callable[[], datetime] | None = None,
        decline_rate: float = PAYMENT_DECLINE_RATE,
        delay_range_ms: tuple[int, int] = (PAYMENT_DELAY_MIN_MS, PAYMENT_DELAY_MAX_MS),
    ):
        self.rng = rng or random.Random()
        self.delay = delay if delay is not None else time.sleep
        self.clock = clock or _utcnow
        self.decline_rate = decline_rate
        self.delay_range_ms = delay_range_ms

    def process(self, payment: PaymentInput, amount) -> TransactionResult:
        self._simulate_network_delay()

        try:
            amount = to_amount(amount)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidAmount()
        #NaN i Infinity to tez zla kwota
        if not amount.is_finite() or amount <= 0:
            raise InvalidAmount()

        if not card_validator.is_valid_card_number(payment.card_number):
            raise InvalidCardNumber()

        now = self.clock()
        if not card_validator.is_valid_expiry(payment.expiry_date, now):
            raise CardExpired()

        network = card_validator.detect_card_network(payment.card_number)
        if not card_validator.is_valid_cvv(payment.cvv, network):
            raise InvalidCVV()

        if not card_validator.is_valid_cardholder_name(payment.cardholder_name):
            raise InvalidCardholderName()

        # 5% szans na odrzucenie, powod losowany rownomiernie
        if self.rng.random() < self.decline_rate:
            reason = self.rng.choice(DECLINE_REASONS)
            logger.warning(f"Payment of {amount} declined ({reason.code}), card {network.value}")
            raise reason()

        last_four = card_validator.clean_card_number(payment.card_number)[-4:]
        result = TransactionResult(
            transaction_id=self._transaction_id(now),
            amount_charged=amount,
            card_network=network,
            last_four_digits=last_four,
            processed_at=now,
        )

        logger.info(
            f"Payment {result.transaction_id} processed: {amount} "
            f"({network.value} ****{last_four})"
        )
        return result

    def _simulate_network_delay(self):
        low, high = self.delay_range_ms
        ms = self.rng.randint(low, high) if high > low else low
        self.delay(ms / 1000)

    def _transaction_id(self, now: datetime) -> str:
        #TXN_<ms base36>_<losowe 7 znakow>, licznik gwarantuje unikalnosc w procesie
        millis = int(now.timestamp() * 1000)
        suffix = "".join(self.rng.choice(_BASE36) for _ in range(7))
        return f"TXN_{_base36(millis)}_{suffix}{_base36(next(_txn_counter))}"
