# shop/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from shop.data.database import Database
from shop.data.models.item import ItemModel
from shop.repos.item_repo import ItemRepo
from shop.utils.logging import get_logger

logger = get_logger(__name__)

CATALOG = [
    ("Book", Decimal("9.99")),
    ("Keyboard", Decimal("199.99")),
    ("Mouse", Decimal("49.50")),
    ("Monitor", Decimal("899.00")),
]


def seed_catalog(db: Session) -> int:
    repo = ItemRepo(db)
    # tylko jesli katalog jest pusty
    if repo.count():
        return 0
    for name, price in CATALOG:
        db.add(ItemModel(name=name, price=price))
    db.commit()
    logger.info(f"Seeded {len(CATALOG)} catalog items")
    return len(CATALOG)


def seed(database: Database | None = None) -> int:
    database = database or Database()
    database.create_all()
    db = database.session()
    try:
        return seed_catalog(db)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
