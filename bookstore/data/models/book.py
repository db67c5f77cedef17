# bookstore/data/models/book.py
import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String, Uuid

from bookstore.data.database import Base
from bookstore.utils.clock import utc_now


class BookModel(Base):
    """Catalog row. Owned by the catalog service; checkout only reads it and decrements stock."""

    __tablename__ = "books"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    author_name = Column(String, nullable=False, default="")
    image_url = Column(String, nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    available_stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    __table_args__ = (
        CheckConstraint("available_stock >= 0", name="ck_books_available_stock"),
        CheckConstraint(
            "discount_percentage >= 0 AND discount_percentage <= 100",
            name="ck_books_discount_percentage",
        ),
    )
