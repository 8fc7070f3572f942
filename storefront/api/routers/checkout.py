# storefront/api/routers/checkout.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.api.routers.carts import get_service as get_cart_service
from storefront.data.database import get_db
from storefront.domain.errors import CheckoutError
from storefront.domain.schemas import (
    CheckoutIn,
    OrderOut,
    PaymentInput,
    PaymentValidationOut,
    SampleCardsOut,
)
from storefront.services.card_validator import (
    TEST_CARDS,
    detect_card_network,
    mask_card_number,
    validate_payment_form,
)
from storefront.services.order_assembler import OrderAssembler
from storefront.services.order_service import OrderService
from storefront.services.payment_simulator import PaymentSimulator

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_payment_simulator() -> PaymentSimulator:
    return PaymentSimulator()


@router.post("/", response_model=OrderOut, status_code=201)
def checkout(
    payload: CheckoutIn,
    user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
    payments: PaymentSimulator = Depends(get_payment_simulator),
):
    """
    Platnosc + zlozenie zamowienia z aktywnego koszyka.
    Typowany blad checkoutu -> {"detail": {"code", "message"}}.
    """
    svc = OrderService(
        db,
        cart_service=get_cart_service(db),
        assembler=OrderAssembler(payments),
    )
    try:
        return svc.checkout(user["id"], payload)
    except CheckoutError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/validate", response_model=PaymentValidationOut)
def validate_payment(payload: PaymentInput):
    errors = validate_payment_form(payload, datetime.now(timezone.utc))
    masked = None
    if "card_number" not in errors:
        masked = mask_card_number(payload.card_number)
    return {
        "is_valid": not errors,
        "errors": errors,
        "card_network": detect_card_network(payload.card_number),
        "masked_card_number": masked,
    }


@router.get("/test-cards", response_model=SampleCardsOut)
def list_test_cards():
    return TEST_CARDS
