
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, Uuid
from sqlalchemy.orm import relationship

from bookstore.data.database import Base
from bookstore.utils.clock import utc_now


class CartItemModel(Base):
    __tablename__ = "cart_items"

    cart_id = Column(Uuid, ForeignKey("carts.id", ondelete="CASCADE"), primary_key=True)
    book_id = Column(Uuid, ForeignKey("books.id"), primary_key=True)

    count = Column(Integer, nullable=False)
    # unit price locked when the line was last added/updated
    cart_price = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (CheckConstraint("count > 0", name="ck_cart_items_count"),)
