# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import OrderOut, OrderStatusIn
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("/", response_model=List[OrderOut])
def list_orders(user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Zamówienia użytkownika, admin widzi wszystkie.
    """
    return get_service(db).list_orders(user)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: str,
    payload: OrderStatusIn,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    svc = get_service(db)
    try:
        return svc.update_status(order_id, payload.status)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{order_id}")
def delete_order(order_id: str, db: Session = Depends(get_db), _admin: dict = Depends(require_admin)):
    svc = get_service(db)
    try:
        svc.delete_order(order_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Order deleted successfully"}
