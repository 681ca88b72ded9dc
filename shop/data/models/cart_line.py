from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from shop.data.database import Base


class CartLineModel(Base):
    __tablename__ = "cart_lines"
    # AUTOINCREMENT: sqlite nie uzyje ponownie id usunietych linii
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    cart = relationship("CartModel", back_populates="lines")
