from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String
from shop.data.database import Base


class ItemModel(Base):
    __tablename__ = "items"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_items_price_non_negative"),)

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
