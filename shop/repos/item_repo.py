# shop/repos/item_repo.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from shop.data.models.item import ItemModel


class ItemRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_item(self, item_id: int) -> ItemModel | None:
        return self.db.get(ItemModel, item_id)

    def list_items(self) -> list[ItemModel]:
        return list(self.db.execute(select(ItemModel).order_by(ItemModel.id)).scalars())

    def create_item(self, item: ItemModel) -> ItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(ItemModel)).scalar_one()
