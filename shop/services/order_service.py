# shop/services/order_service.py
from typing import List, Sequence

from sqlalchemy.orm import Session

from shop.data.models.order import OrderModel
from shop.data.models.order_line import OrderLineModel
from shop.domain.errors import Conflict, EmptyCart, Forbidden, OrderNotFound
from shop.domain.identity import UserIdentity
from shop.domain.schemas import OrderOut
from shop.repos.order_repo import OrderRepo
from shop.services.cart_service import CartService, cart_lock_key
from shop.services.lock_service import LockService
from shop.services.notification_service import NotificationService
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Checkout zamienia linie koszyka w zamowienie i czysci koszyk w jednej transakcji.
    """

    def __init__(
        self,
        db: Session,
        cart_service: CartService,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = cart_service
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def checkout(self, user: UserIdentity, cart_id: int) -> OrderOut:
        """
        Use Case: Tworzenie zamówienia z koszyka.

        1. Weryfikuje, czy koszyk nalezy do uzytkownika
        2. Odrzuca pusty koszyk
        3. Tworzy zamowienie z kopia linii
        4. Usuwa dokladnie te linie, ktore zostaly przeczytane
        5. Podbija wersje koszyka i commituje calosc
        6. Wysyła powiadomienie (async)
        """
        with self.lock_service.hold(cart_lock_key(cart_id)):
            cart = self.carts.get_owned_cart(user, cart_id)

            lines = self.carts.get_lines(cart_id)
            if not lines:
                logger.warning(f"Checkout of empty cart {cart_id} by user {user.id}")
                raise EmptyCart(cart_id)

            try:
                order = self.record_order(user.id, cart_id, [line.item_id for line in lines])

                removed = self.carts.clear_lines(cart_id, [line.id for line in lines])
                if removed != len(lines):
                    raise Conflict("Koszyk zostal zmieniony podczas skladania zamowienia")

                if self.carts.bump_version(cart) == 0:
                    raise Conflict("Konflikt wspolbieznosci - koszyk zostal zmodyfikowany przez inna operacje")

                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        logger.info(f"Order {order.id} created from cart {cart_id} with {len(lines)} lines")

        placed = OrderOut.model_validate(order)

        try:
            self.notification_service.send_order_notification(placed)
        except Exception as e:
            # zamowienie juz zapisane, brak brokera nie cofa checkoutu
            logger.warning(f"Failed to dispatch notification for order {order.id}: {e}")

        return placed

    def record_order(self, user_id: int, cart_id: int, item_ids: Sequence[int]) -> OrderModel:
        order = OrderModel(
            user_id=user_id,
            cart_id=cart_id,
            lines=[OrderLineModel(item_id=item_id) for item_id in item_ids],
        )
        return self.repo.add_order(order)

    def list_orders(self, user: UserIdentity) -> List[OrderOut]:
        """
        Use Case: Historia zamowien (Query). Tylko zamowienia wolajacego.
        """
        return [OrderOut.model_validate(o) for o in self.repo.list_orders_by_user(user.id)]

    def get_order(self, user: UserIdentity, order_id: int) -> OrderOut:
        order = self.repo.get_order(order_id)

        if not order:
            raise OrderNotFound(order_id)

        if order.user_id != user.id:
            raise Forbidden("Brak dostępu do zamówienia")

        return OrderOut.model_validate(order)
