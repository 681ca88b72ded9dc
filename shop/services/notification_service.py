# shop/services/notification_service.py
from collections import Counter
from typing import Any, Dict, List

from shop.celery_worker import celery_app
from shop.domain.schemas import OrderOut
from shop.utils.logging import get_logger

logger = get_logger(__name__)


def order_placed_payload(order: OrderOut) -> Dict[str, Any]:
    """Dane zamowienia przekazywane do taska (tylko typy JSON)."""
    return {
        "order_id": order.id,
        "user_id": order.user_id,
        "item_ids": [line.item_id for line in order.lines],
    }


def render_order_placed(payload: Dict[str, Any]) -> str:
    # "Order 5 placed: 2 x item 1, 1 x item 3"
    counts = Counter(payload["item_ids"])
    parts: List[str] = [f"{n} x item {item_id}" for item_id, n in sorted(counts.items())]
    return f"Order {payload['order_id']} placed: {', '.join(parts)}"


class NotificationService:
    """Potwierdzenie zamowienia wysylane przez Celery po commicie checkoutu."""

    @staticmethod
    def send_order_notification(order: OrderOut):
        return send_order_placed_task.delay(order_placed_payload(order))


@celery_app.task(name="shop.services.notification_service.send_order_placed_task")
def send_order_placed_task(payload: Dict[str, Any]):
    message = render_order_placed(payload)
    logger.info(f"[NOTIFICATION] user {payload['user_id']}: {message}")
    return {
        "user_id": payload["user_id"],
        "order_id": payload["order_id"],
        "lines": len(payload["item_ids"]),
        "message": message,
    }
