
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, Uuid
from sqlalchemy.orm import relationship

from bookstore.data.database import Base
from bookstore.utils.clock import utc_now


class OrderItemModel(Base):
    __tablename__ = "order_items"

    order_id = Column(Uuid, ForeignKey("orders.id"), primary_key=True)
    book_id = Column(Uuid, ForeignKey("books.id"), primary_key=True)

    purchase_count = Column(Integer, nullable=False)
    purchase_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    order = relationship("OrderModel", back_populates="items")

    __table_args__ = (CheckConstraint("purchase_count > 0", name="ck_order_items_purchase_count"),)
