import uuid

from sqlalchemy import Column, DateTime, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from bookstore.data.database import Base
from bookstore.domain.enums import OrderStatus, PaymentStatus
from bookstore.utils.clock import utc_now


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_number = Column(String(64), nullable=False, unique=True)
    user_id = Column(Uuid, nullable=False, index=True)

    total_price = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(20), nullable=True)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)  # PENDING, PAID, FAILED
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)  # PENDING, COMPLETED, CANCELLED

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    items = relationship("OrderItemModel", back_populates="order")
