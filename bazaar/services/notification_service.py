# bazaar/services/notification_service.py
from kombu.exceptions import OperationalError

from bazaar.celery_worker import celery_app
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int):
        """
        Wysyla powiadomienie o zlozeniu zamowienia.
        Zamowienie jest juz zapisane, wiec niedzialajacy broker tylko logujemy.
        """
        try:
            send_order_notification_task.delay(user_id, order_id)
        except OperationalError as e:
            logger.warning(f"Nie udalo sie wyslac powiadomienia o zamowieniu {order_id}: {e}")


@celery_app.task(name="bazaar.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} confirmed")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
