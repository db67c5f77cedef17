# bookstore/services/notification_service.py
from typing import Callable
from uuid import UUID

from bookstore.celery_worker import celery_app
from bookstore.domain.enums import OrderEvent
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Submits order notifications to the Celery worker.

    Delivery is best-effort and at-most-once. Callers submit only after their
    transaction committed; a failed submission is logged and dropped so it can
    never undo or fail a completed checkout.
    """

    def __init__(self, dispatch: Callable[..., object] | None = None):
        self.dispatch = dispatch or send_order_notification_task.delay

    def send_order_notification(self, user_id: UUID, order_id: UUID, event: OrderEvent) -> bool:
        try:
            self.dispatch(str(user_id), str(order_id), event.value)
        except Exception as e:
            logger.warning(f"Notification {event.value} for order {order_id} dropped: {e}")
            return False

        logger.info(f"Notification {event.value} for order {order_id} submitted")
        return True


@celery_app.task(name="bookstore.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str, event: str):
    # email / push delivery plugs in here
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} {event}")
    return {"user_id": user_id, "order_id": order_id, "event": event, "status": "sent"}
