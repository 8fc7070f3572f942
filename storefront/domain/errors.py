# storefront/domain/errors.py
"""
Typowane bledy checkoutu.

Kazdy rodzaj bledu to osobna klasa ze stalym `code`, zeby warstwa HTTP
mogla mapowac je na status bez porownywania tekstu komunikatu.
"""


class CheckoutError(Exception):
    code = "CHECKOUT_ERROR"
    status_code = 400
    default_message = "Checkout failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class EmptyCartError(CheckoutError):
    code = "EMPTY_CART"
    default_message = "Cart is empty"


# walidacja danych wejsciowych - klient poprawia i wysyla ponownie
class PaymentValidationError(CheckoutError):
    code = "PAYMENT_VALIDATION_ERROR"


class InvalidAmount(PaymentValidationError):
    code = "INVALID_AMOUNT"
    default_message = "Invalid amount"


class InvalidCardNumber(PaymentValidationError):
    code = "INVALID_CARD_NUMBER"
    default_message = "Invalid card number"


class CardExpired(PaymentValidationError):
    code = "CARD_EXPIRED"
    default_message = "Card has expired or invalid expiry date"


class InvalidCVV(PaymentValidationError):
    code = "INVALID_CVV"
    default_message = "Invalid CVV"


class InvalidCardholderName(PaymentValidationError):
    code = "INVALID_CARDHOLDER_NAME"
    default_message = "Invalid cardholder name"


# symulowane odrzucenia bramki
class PaymentDeclinedError(CheckoutError):
    code = "PAYMENT_DECLINED"
    status_code = 402
    default_message = "Payment declined by issuer"


class PaymentDeclined(PaymentDeclinedError):
    pass


class InsufficientFunds(PaymentDeclinedError):
    code = "INSUFFICIENT_FUNDS"
    default_message = "Insufficient funds"


class CardLimitExceeded(PaymentDeclinedError):
    code = "CARD_LIMIT_EXCEEDED"
    default_message = "Card limit exceeded"


class FraudTriggered(PaymentDeclinedError):
    code = "FRAUD_TRIGGERED"
    default_message = "Fraud detection triggered"


DECLINE_REASONS = (PaymentDeclined, InsufficientFunds, CardLimitExceeded, FraudTriggered)


__all__ = [
    "CheckoutError",
    "EmptyCartError",
    "PaymentValidationError",
    "InvalidAmount",
    "InvalidCardNumber",
    "CardExpired",
    "InvalidCVV",
    "InvalidCardholderName",
    "PaymentDeclinedError",
    "PaymentDeclined",
    "InsufficientFunds",
    "CardLimitExceeded",
    "FraudTriggered",
    "DECLINE_REASONS",
]
