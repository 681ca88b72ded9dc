from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from shop.data.database import Base


class OrderLineModel(Base):
    __tablename__ = "order_lines"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)

    order = relationship("OrderModel", back_populates="lines")
