#storefront/api/routers/carts.py
import requests
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.domain.schemas import CartOut, ItemIn, QuantityIn
from storefront.services.cart_service import CartService
from storefront.services.catalog_client import get_catalog

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db, catalog=get_catalog(db))


@router.get("/", response_model=CartOut)
def get_cart(user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).get_cart(user["id"])


@router.post("/items", response_model=CartOut)
def add_item(payload: ItemIn, user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_product(user["id"], payload.product_id, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except requests.RequestException as e:
        raise HTTPException(status_code=502, detail=f"Catalog unavailable: {e}")
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/items/{product_id}", response_model=CartOut)
def update_item(
    product_id: int,
    payload: QuantityIn,
    user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_quantity(user["id"], product_id, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(product_id: int, user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.remove_product(user["id"], product_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/", response_model=CartOut)
def clear_cart(user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.clear_cart(user["id"])
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
