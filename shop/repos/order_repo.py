# shop/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from shop.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # bez commitu - checkout commituje calosc naraz
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders_by_user(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.lines))
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.id)
            ).scalars()
        )
