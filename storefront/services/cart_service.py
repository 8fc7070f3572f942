# storefront/services/cart_service.py
from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.schemas import CartLineItem
from storefront.repos.cart_repo import CartRepo
from storefront.services import cart_totals
from storefront.utils.settings import CART_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


def _as_utc(dt: datetime) -> datetime:
    #sqlite oddaje naive datetime
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class CartService:
    """
    Koszyk po stronie serwera, jeden aktywny na uzytkownika.
    Commands (add, update, remove, clear) modyfikuja stan i podbijaja wersje,
    query (get, line_items) tylko czytaja.
    """

    def __init__(self, db: Session, catalog):
        self.repo = CartRepo(db)
        self.catalog = catalog

    #query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self._active_cart(user_id)
        return self._view(cart)

    def line_items(self, user_id: int) -> List[CartLineItem]:
        cart = self._active_cart(user_id)
        return self._line_items(cart.id)

    def active_cart(self, user_id: int) -> CartModel:
        return self._active_cart(user_id)

    #commands
    def add_product(self, user_id: int, product_id: int, quantity: int = 1) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        cart = self._active_cart(user_id)

        logger.info(f"Pobieranie danych produktu {product_id} z katalogu")
        pdata = self.catalog.fetch_product(product_id)
        price = Decimal(str(pdata["price"])).quantize(CENT)

        existing_item = self.repo.get_cart_item(cart.id, product_id)

        if existing_item:
            logger.info(
                f"Produkt {product_id} już jest w koszyku {cart.id}, zwiekszam ilosc "
                f"z {existing_item.quantity} do {existing_item.quantity + quantity}"
            )
            existing_item.quantity += quantity
            existing_item.price = price  # update ceny
            existing_item.name = pdata["name"]
            self.repo.add_cart_item(existing_item)
        else:
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    product_id=product_id,
                    name=pdata["name"],
                    quantity=quantity,
                    price=price,
                )
            )

        self._bump_version(cart)
        return self._view(cart)

    def update_quantity(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        #ilosc <= 0 dziala jak usuniecie
        if quantity <= 0:
            return self.remove_product(user_id, product_id)

        cart = self._active_cart(user_id)
        item = self.repo.get_cart_item(cart.id, product_id)
        if not item:
            raise ValueError("Product not in cart")

        item.quantity = quantity
        self.repo.add_cart_item(item)

        self._bump_version(cart)
        return self._view(cart)

    def remove_product(self, user_id: int, product_id: int) -> Dict[str, Any]:
        cart = self._active_cart(user_id)

        logger.info(f"Usuwanie produktu {product_id} z koszyka {cart.id}")
        if self.repo.delete_cart_item(cart.id, product_id) == 0:
            raise ValueError("Product not in cart")

        self._bump_version(cart)
        return self._view(cart)

    def clear_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self._active_cart(user_id)
        removed = self.repo.delete_all_items(cart.id)
        logger.info(f"Koszyk {cart.id} wyczyszczony ({removed} pozycji)")

        self._bump_version(cart)
        return self._view(cart)

    def mark_checked_out(self, cart: CartModel) -> None:
        """Bez commita - commit robi OrderService razem z zamowieniem."""
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"status": "CHECKED_OUT", "version": cart.version + 1},
        )
        if rowcount == 0:
            raise RuntimeError("Cart was modified concurrently, please retry")

    #helpers
    def _active_cart(self, user_id: int) -> CartModel:
        now = datetime.now(timezone.utc)
        cart = self.repo.get_active_cart_by_user(user_id)

        if cart and _as_utc(cart.expires_at) < now:
            logger.info(f"Koszyk {cart.id} wygasl, tworze nowy dla użytkownika {user_id}")
            cart.status = "EXPIRED"
            self.repo.commit()
            cart = None

        if cart:
            return cart

        created = self.repo.create_cart(
            CartModel(
                user_id=user_id,
                status="ACTIVE",
                version=1,
                expires_at=now + timedelta(seconds=CART_TTL_SECONDS),
            )
        )
        logger.info(f"Utworzono nowy koszyk {created.id} dla użytkownika {user_id}")
        return created

    def _bump_version(self, cart: CartModel) -> None:
        # Optimistic locking + przedluzenie TTL przy kazdej zmianie
        new_expires = datetime.now(timezone.utc) + timedelta(seconds=CART_TTL_SECONDS)
        old_version = cart.version

        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=old_version,
            new_data={"version": old_version + 1, "expires_at": new_expires},
        )

        if rowcount == 0:
            self.repo.rollback()
            raise RuntimeError("Cart was modified concurrently, please retry")

        self.repo.commit()
        logger.info(f"Koszyk {cart.id} zmieniony, nowa wersja: {old_version + 1}")

    def _line_items(self, cart_id: int) -> List[CartLineItem]:
        return [
            CartLineItem(
                product_id=i.product_id,
                name=i.name,
                unit_price=i.price,
                quantity=i.quantity,
            )
            for i in self.repo.get_cart_items(cart_id)
        ]

    def _view(self, cart: CartModel) -> Dict[str, Any]:
        items = self._line_items(cart.id)
        totals = cart_totals.summarize(items)

        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "status": cart.status,
            "items": items,
            "item_count": cart_totals.item_count(items),
            "subtotal": totals.subtotal,
            "shipping_fee": totals.shipping_fee,
            "tax": totals.tax,
            "total": totals.total,
            "expires_at": cart.expires_at,
        }
