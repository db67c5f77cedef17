#bookstore/data/models/cart.py
import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import relationship

from bookstore.data.database import Base
from bookstore.utils.clock import utc_now


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    items = relationship("CartItemModel", back_populates="cart")
