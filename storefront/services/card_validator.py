# storefront/services/card_validator.py
"""
Walidacja danych karty: Luhn, data waznosci, CVV, wykrywanie sieci.

Funkcje sa czyste - nie rzucaja wyjatkow dla blednych danych,
zwracaja bool / CardNetwork.
"""
import re
from datetime import date, datetime

from storefront.domain.schemas import CardNetwork, PaymentInput

_WHITESPACE = re.compile(r"\s")
_CARD_DIGITS = re.compile(r"^\d{13,19}$", re.ASCII)
_EXPIRY = re.compile(r"^(\d{2})/(\d{2})$", re.ASCII)
_CENTURY_WINDOW = 50

#kolejnosc ma znaczenie, pierwszy pasujacy wygrywa
_NETWORK_PATTERNS = (
    (CardNetwork.VISA, re.compile(r"^4")),
    (CardNetwork.MASTERCARD, re.compile(r"^5[1-5]")),
    (CardNetwork.AMEX, re.compile(r"^3[47]")),
    (CardNetwork.DISCOVER, re.compile(r"^6(?:011|5)")),
    (CardNetwork.DINERS, re.compile(r"^3(?:0[0-5]|[68])")),
    (CardNetwork.JCB, re.compile(r"^(?:2131|1800|35)")),
)

TEST_CARDS = {
    "success": [
        {"number": "4242424242424242", "type": "Visa", "description": "Always succeeds"},
        {"number": "5555555555554444", "type": "Mastercard", "description": "Always succeeds"},
        {"number": "378282246310005", "type": "American Express", "description": "Always succeeds"},
        {"number": "6011111111111117", "type": "Discover", "description": "Always succeeds"},
    ],
    "decline": [
        {"number": "4000000000000002", "type": "Visa", "description": "Card declined"},
        {"number": "4000000000009995", "type": "Visa", "description": "Insufficient funds"},
    ],
}


def clean_card_number(card_number: str) -> str:
    return _WHITESPACE.sub("", card_number or "")


def detect_card_network(card_number: str) -> CardNetwork:
    cleaned = clean_card_number(card_number)
    for network, pattern in _NETWORK_PATTERNS:
        if pattern.match(cleaned):
            return network
    return CardNetwork.UNKNOWN


def is_valid_card_number(card_number: str) -> bool:
    """Luhn: od prawej podwajamy co druga cyfre, >9 odejmujemy 9, suma % 10 == 0."""
    cleaned = clean_card_number(card_number)
    if not _CARD_DIGITS.fullmatch(cleaned):
        return False

    total = 0
    for i, ch in enumerate(reversed(cleaned)):
        digit = int(ch)
        if i % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return total % 10 == 0


def is_valid_expiry(expiry: str, reference_date: date | datetime) -> bool:
    """
    Format MM/YY. Karta wazna do konca miesiaca waznosci,
    wiec ten sam rok i miesiac co reference_date to jeszcze OK.

    YY rozwijane do stulecia najblizszego reference_date (okno +-50 lat),
    np. dla 2025: "30" -> 2030, "99" -> 1999.
    """
    m = _EXPIRY.fullmatch(expiry or "")
    if not m:
        return False

    month, year = int(m.group(1)), int(m.group(2))
    if month < 1 or month > 12:
        return False

    current_year = reference_date.year
    full_year = current_year - current_year % 100 + year
    if full_year > current_year + _CENTURY_WINDOW:
        full_year -= 100
    elif full_year < current_year - _CENTURY_WINDOW:
        full_year += 100

    return (full_year, month) >= (current_year, reference_date.month)


def is_valid_cvv(cvv: str, network: CardNetwork) -> bool:
    cleaned = _WHITESPACE.sub("", cvv or "")
    length = 4 if network == CardNetwork.AMEX else 3
    return len(cleaned) == length and cleaned.isascii() and cleaned.isdigit()


def is_valid_cardholder_name(name: str) -> bool:
    return bool(name) and len(name.strip()) >= 3


def mask_card_number(card_number: str) -> str:
    last_four = clean_card_number(card_number)[-4:]
    return f"•••• •••• •••• {last_four}"


def validate_payment_form(payment: PaymentInput, reference_date: date | datetime) -> dict[str, str]:
    """Bledy per pole formularza, pusty dict = formularz poprawny."""
    errors: dict[str, str] = {}

    if not payment.card_number:
        errors["card_number"] = "Card number is required"
    elif not is_valid_card_number(payment.card_number):
        errors["card_number"] = "Invalid card number"

    if not is_valid_cardholder_name(payment.cardholder_name):
        errors["cardholder_name"] = "Valid cardholder name is required"

    if not payment.expiry_date:
        errors["expiry_date"] = "Expiry date is required"
    elif not is_valid_expiry(payment.expiry_date, reference_date):
        errors["expiry_date"] = "Card has expired or invalid date"

    network = detect_card_network(payment.card_number)
    if not payment.cvv:
        errors["cvv"] = "CVV is required"
    elif not is_valid_cvv(payment.cvv, network):
        errors["cvv"] = "CVV must be 4 digits" if network == CardNetwork.AMEX else "CVV must be 3 digits"

    return errors
