# storefront/services/notification_service.py
from kombu.exceptions import OperationalError

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_confirmation(user_id: int, order_id: str, email: str, total: str) -> bool:
        """
        Kolejkuje potwierdzenie zamowienia. Zamowienie jest juz zapisane,
        wiec niedostepny broker nie cofa checkoutu - tylko logujemy.
        """
        try:
            send_order_confirmation_task.delay(user_id, order_id, email, total)
        except OperationalError as e:
            logger.warning(f"Could not enqueue confirmation for order {order_id}: {e}")
            return False
        return True


@celery_app.task(name="storefront.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(user_id: int, order_id: str, email: str, total: str):
    """
    Celery task - w prawdziwym systemie wysłałby email.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: confirmation for order {order_id} ({total}) sent to {email}")

    return {"user_id": user_id, "order_id": order_id, "email": email, "status": "sent"}
