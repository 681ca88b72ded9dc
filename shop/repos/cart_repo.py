# shop/repos/cart_repo.py
from typing import Any, Dict, Iterable

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from shop.data.models.cart import CartModel
from shop.data.models.cart_line import CartLineModel


class CartRepo:
    """Dostep do tabel carts / cart_lines. Commit tylko przez commit()."""

    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        # populate_existing: sesja trzyma obiekty po commit, wersja moze byc nieaktualna
        return self.db.get(CartModel, cart_id, populate_existing=True)

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_lines(self, cart_id: int) -> list[CartLineModel]:
        return list(
            self.db.execute(
                select(CartLineModel)
                .where(CartLineModel.cart_id == cart_id)
                .order_by(CartLineModel.id)
            ).scalars()
        )

    def add_line(self, line: CartLineModel) -> CartLineModel:
        self.db.add(line)
        self.db.flush()
        return line

    def delete_lines(self, cart_id: int, line_ids: Iterable[int] | None = None) -> int:
        stmt = delete(CartLineModel).where(CartLineModel.cart_id == cart_id)
        if line_ids is not None:
            stmt = stmt.where(CartLineModel.id.in_(list(line_ids)))
        result = self.db.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount

    def update_cart_version(self, cart_id: int, old_version: int, new_data: Dict[str, Any]) -> int:
        # UPDATE carts SET version = :new WHERE id = :id AND version = :old
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
