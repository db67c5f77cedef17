# bookstore/repos/order_repo.py
from typing import Iterable, List
from uuid import UUID

from sqlalchemy import Row, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.data.models.book import BookModel
from bookstore.data.models.order import OrderModel
from bookstore.data.models.order_item import OrderItemModel
from bookstore.domain.enums import OrderStatus, PaymentStatus
from bookstore.domain.errors import InsufficientStock, OrderNumberConflict
from bookstore.repos.book_repo import BookRepo
from bookstore.utils.clock import utc_now


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db
        self.books = BookRepo(db)

    def create_order(self, order: OrderModel) -> OrderModel:
        # savepoint, so a duplicate order number does not poison the outer transaction
        try:
            with self.db.begin_nested():
                self.db.add(order)
                self.db.flush()
        except IntegrityError:
            if self.order_number_exists(order.order_number):
                raise OrderNumberConflict(order.order_number)
            raise
        return order

    def order_number_exists(self, order_number: str) -> bool:
        stmt = select(OrderModel.id).where(OrderModel.order_number == order_number)
        return self.db.execute(stmt).first() is not None

    def create_order_items(self, items: List[OrderItemModel]) -> None:
        self.db.add_all(items)
        self.db.flush()

    def get_order(self, order_id: UUID, refresh: bool = False) -> OrderModel | None:
        return self.db.get(OrderModel, order_id, populate_existing=refresh)

    def get_order_items(self, order_id: UUID) -> List[Row]:
        stmt = (
            select(
                OrderItemModel.book_id,
                BookModel.name,
                BookModel.image_url,
                OrderItemModel.purchase_price.label("unit_price"),
                OrderItemModel.purchase_count.label("quantity"),
                OrderItemModel.total_price.label("line_total"),
            )
            .join(BookModel, BookModel.id == OrderItemModel.book_id)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.created_at.asc(), OrderItemModel.book_id)
        )
        return list(self.db.execute(stmt).all())

    def transition_order(
        self,
        order_id: UUID,
        status: OrderStatus,
        payment_status: PaymentStatus,
    ) -> bool:
        """Move a PENDING order to a terminal state. False when it was no longer PENDING."""
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == OrderStatus.PENDING.value)
            .values(
                status=status.value,
                payment_status=payment_status.value,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def decrement_stock(self, items: Iterable) -> None:
        for item in items:
            if not self.books.conditional_decrement_stock(item.book_id, item.quantity):
                raise InsufficientStock(item.book_id)

    def list_orders_by_user(self, user_id: UUID, limit: int, offset: int) -> List[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_orders(self, limit: int, offset: int) -> List[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc()).limit(limit).offset(offset)
        return list(self.db.execute(stmt).scalars().all())
