from typing import Iterable, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shop.data.models.cart import CartModel
from shop.data.models.cart_line import CartLineModel
from shop.domain.errors import CartNotFound, Conflict, Forbidden, ItemNotFound
from shop.domain.identity import UserIdentity
from shop.domain.schemas import CartLineOut, CartOut
from shop.repos.cart_repo import CartRepo
from shop.services.catalog_service import CatalogService
from shop.services.lock_service import LockService
from shop.utils.logging import get_logger

logger = get_logger(__name__)


def cart_lock_key(cart_id: int) -> str:
    return f"cart:{cart_id}"


def user_cart_lock_key(user_id: int) -> str:
    return f"user:{user_id}:cart"


class CartService:
    """
    Jeden koszyk na uzytkownika, tworzony leniwie przy pierwszym dodaniu.
    commands (get_or_create, add_line, clear_lines) modyfikuja stan
    query (get_lines, get_cart, list_carts) tylko odczyt
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        catalog: CatalogService | None = None,
    ):
        self.repo = CartRepo(db)
        self.lock_service = lock_service
        self.catalog = catalog or CatalogService(db)

    #query - odczyt
    def get_lines(self, cart_id: int) -> List[CartLineOut]:
        return [CartLineOut.model_validate(line) for line in self.repo.get_lines(cart_id)]

    def get_owned_cart(self, user: UserIdentity, cart_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)

        if not cart:
            raise CartNotFound(cart_id)

        if cart.user_id != user.id:
            logger.warning(f"User {user.id} tried to access cart {cart_id} of user {cart.user_id}")
            raise Forbidden("Brak dostepu do koszyka")

        return cart

    def get_cart(self, user: UserIdentity, cart_id: int) -> CartOut:
        cart = self.get_owned_cart(user, cart_id)
        return self._to_out(cart)

    def list_carts(self, user: UserIdentity) -> List[CartOut]:
        cart = self.repo.get_cart_by_user(user.id)
        return [self._to_out(cart)] if cart else []

    #commands
    def get_or_create_cart(self, user: UserIdentity) -> int:
        existing = self.repo.get_cart_by_user(user.id)
        if existing:
            return existing.id

        # lookup-before-create pod lockiem uzytkownika, unique(user_id) jako druga linia
        with self.lock_service.hold(user_cart_lock_key(user.id)):
            existing = self.repo.get_cart_by_user(user.id)
            if existing:
                return existing.id

            try:
                created = self.repo.create_cart(CartModel(user_id=user.id, version=1))
            except IntegrityError:
                self.repo.rollback()
                existing = self.repo.get_cart_by_user(user.id)
                if existing:
                    logger.info(f"Cart {existing.id} for user {user.id} created by concurrent request")
                    return existing.id
                raise

        logger.info(f"Utworzono nowy koszyk {created.id} dla uzytkownika {user.id}")
        return created.id

    def add_line(self, user: UserIdentity, item_id: int) -> CartLineOut:
        if not self.catalog.exists(item_id):
            logger.warning(f"User {user.id} tried to add missing item {item_id}")
            raise ItemNotFound(item_id)

        cart_id = self.get_or_create_cart(user)

        with self.lock_service.hold(cart_lock_key(cart_id)):
            cart = self.repo.get_cart(cart_id)
            try:
                line = self.repo.add_line(CartLineModel(cart_id=cart_id, item_id=item_id))

                # Optimistic locking na wersji koszyka
                rowcount = self.repo.update_cart_version(
                    cart_id=cart.id,
                    old_version=cart.version,
                    new_data={"version": cart.version + 1},
                )
                if rowcount == 0:
                    raise Conflict("Konflikt wspolbieznosci - koszyk zostal zmodyfikowany przez inna operacje")

                self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise

        logger.info(f"Item {item_id} added to cart {cart_id} as line {line.id}, version {cart.version + 1}")
        return CartLineOut.model_validate(line)

    def clear_lines(self, cart_id: int, line_ids: Iterable[int] | None = None) -> int:
        """
        Usuwa linie koszyka (tylko line_ids, jesli podane). Sam koszyk zostaje.
        Bez commitu - wolajacy zarzadza transakcja.
        """
        removed = self.repo.delete_lines(cart_id, line_ids)
        logger.info(f"Removed {removed} lines from cart {cart_id}")
        return removed

    def bump_version(self, cart: CartModel) -> int:
        return self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"version": cart.version + 1},
        )

    def _to_out(self, cart: CartModel) -> CartOut:
        return CartOut(
            id=cart.id,
            user_id=cart.user_id,
            version=cart.version,
            lines=self.get_lines(cart.id),
        )
