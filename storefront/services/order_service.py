# storefront/services/order_service.py
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.schemas import CheckoutIn, ORDER_STATUSES, Order
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartService
from storefront.services.notification_service import NotificationService
from storefront.services.order_assembler import OrderAssembler
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _is_admin(user: dict) -> bool:
    return user.get("role") == "admin"


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Separacja od CartService - koszyk tylko dostarcza pozycje.
    """

    def __init__(
        self,
        db: Session,
        cart_service: CartService | None = None,
        assembler: OrderAssembler | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_service = cart_service
        self.assembler = assembler
        self.notification_service = notification_service or NotificationService()

    def checkout(self, user_id: int, payload: CheckoutIn):
        """
        Use Case: checkout aktywnego koszyka.

        1. Pobiera pozycje koszyka
        2. OrderAssembler: pusty koszyk / platnosc / zlozenie Order
           (CheckoutError leci dalej bez zmian)
        3. Zapisuje zamowienie i zamyka koszyk w jednej transakcji
        4. Wysyła potwierdzenie (async)
        """
        cart = self.cart_service.active_cart(user_id)
        items = self.cart_service.line_items(user_id)

        order = self.assembler.place_order(items, payload.shipping_address, payload.payment)

        try:
            created = self.repo.create_order(self._to_model(order, user_id), commit=False)
            self.cart_service.mark_checked_out(cart)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(
                f"Order {order.order_id} not saved, transaction "
                f"{order.transaction.transaction_id} needs manual review"
            )
            raise
        self.db.refresh(created)

        logger.info(f"Order {created.id} created from cart {cart.id} for user {user_id}")

        self.notification_service.send_order_confirmation(
            user_id, created.id, order.shipping_address.email, str(order.total)
        )

        return self._to_dict(created)

    def get_order(self, order_id: str, user: dict):
        """
        Use Case: Pobranie zamówienia (Query).
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise ValueError("Order not found")

        if order.user_id != user["id"] and not _is_admin(user):
            raise PermissionError("Access to order denied")

        return self._to_dict(order)

    def list_orders(self, user: dict):
        user_id = None if _is_admin(user) else user["id"]
        return [self._to_dict(o) for o in self.repo.list_orders(user_id)]

    def update_status(self, order_id: str, status: str):
        if status not in ORDER_STATUSES:
            raise ValueError(f"Invalid status: {status}")

        order = self.repo.update_order_status(order_id, status)
        if not order:
            raise ValueError("Order not found")

        logger.info(f"Order {order_id} status -> {status}")
        return self._to_dict(order)

    def delete_order(self, order_id: str) -> None:
        order = self.repo.get_order(order_id)
        if not order:
            raise ValueError("Order not found")

        self.repo.delete_order(order)
        logger.info(f"Order {order_id} deleted")

    @staticmethod
    def _to_model(order: Order, user_id: int) -> OrderModel:
        data = order.model_dump(mode="json")
        return OrderModel(
            id=order.order_id,
            user_id=user_id,
            status="pending",
            line_items=data["line_items"],
            shipping_address=data["shipping_address"],
            transaction=data["transaction"],
            subtotal=order.subtotal,
            shipping_fee=order.shipping_fee,
            tax=order.tax,
            total=order.total,
            created_at=order.created_at,
        )

    @staticmethod
    def _to_dict(order: OrderModel):
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status,
            "line_items": order.line_items,
            "shipping_address": order.shipping_address,
            "transaction": order.transaction,
            "subtotal": order.subtotal,
            "shipping_fee": order.shipping_fee,
            "tax": order.tax,
            "total": order.total,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
        }
