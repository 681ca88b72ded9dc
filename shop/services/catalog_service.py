# shop/services/catalog_service.py
from sqlalchemy.orm import Session

from shop.data.models.item import ItemModel
from shop.domain.errors import ItemNotFound
from shop.domain.schemas import ItemCreate, ItemOut
from shop.repos.item_repo import ItemRepo
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Katalog produktow. Dla koszyka i zamowien tylko do odczytu."""

    def __init__(self, db: Session):
        self.repo = ItemRepo(db)

    def create_item(self, payload: ItemCreate) -> ItemOut:
        item = self.repo.create_item(ItemModel(name=payload.name, price=payload.price))
        logger.info(f"Created item {item.id} ({item.name}, {item.price})")
        return ItemOut.model_validate(item)

    def list_items(self) -> list[ItemOut]:
        return [ItemOut.model_validate(i) for i in self.repo.list_items()]

    def get_item(self, item_id: int) -> ItemOut:
        item = self.repo.get_item(item_id)
        if not item:
            raise ItemNotFound(item_id)
        return ItemOut.model_validate(item)

    def exists(self, item_id: int) -> bool:
        return self.repo.get_item(item_id) is not None
