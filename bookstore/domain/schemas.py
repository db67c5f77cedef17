# bookstore/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime
from uuid import UUID

from bookstore.domain.enums import OrderStatus, PaymentMethod, PaymentStatus


class ItemIn(BaseModel):
    """Schema for adding or updating a cart line."""

    book_id: UUID = Field(..., description="Book to put in the cart")
    count: int = Field(..., gt=0, description="Requested quantity (must be > 0)")


class CartItemOut(BaseModel):
    """Cart line joined with catalog display data."""

    book_id: UUID
    name: str
    author_name: str
    image_url: str | None = None
    unit_price: Decimal
    count: int
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    cart_id: UUID
    user_id: UUID
    items: List[CartItemOut]
    subtotal: Decimal
    total_items: int


class CheckoutIn(BaseModel):
    """Schema for turning the cart into an order."""

    payment_method: PaymentMethod


class PaymentConfirmIn(BaseModel):
    """Outcome reported by the payment provider for an order."""

    order_id: UUID
    success: bool


class OrderOut(BaseModel):
    id: UUID
    order_number: str
    user_id: UUID
    total_price: Decimal
    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderItemOut(BaseModel):
    book_id: UUID
    name: str
    image_url: str | None = None
    unit_price: Decimal
    count: int
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderView(BaseModel):
    """Order header together with its line items."""

    order: OrderOut
    items: List[OrderItemOut]


class StatusOut(BaseModel):
    status: str
