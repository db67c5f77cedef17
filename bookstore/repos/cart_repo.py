# bookstore/repos/cart_repo.py
from decimal import Decimal
from typing import List
from uuid import UUID, uuid4

from sqlalchemy import Row, select, update
from sqlalchemy.orm import Session

from bookstore.data.database import dialect_insert
from bookstore.data.models.book import BookModel
from bookstore.data.models.cart import CartModel
from bookstore.data.models.cart_item import CartItemModel
from bookstore.utils.clock import utc_now


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_or_create_cart(self, user_id: UUID) -> CartModel:
        # INSERT ... ON CONFLICT (user_id) DO NOTHING, safe under concurrent first access
        stmt = (
            dialect_insert(self.db, CartModel)
            .values(id=uuid4(), user_id=user_id, created_at=utc_now())
            .on_conflict_do_nothing(index_elements=["user_id"])
        )
        self.db.execute(stmt)
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one()

    def get_cart_items(self, user_id: UUID) -> List[Row]:
        """Active lines with display data; unit_price is the locked cart price."""
        stmt = (
            select(
                CartItemModel.book_id,
                BookModel.name,
                BookModel.author_name,
                BookModel.image_url,
                CartItemModel.cart_price.label("unit_price"),
                CartItemModel.count.label("quantity"),
            )
            .join(CartModel, CartModel.id == CartItemModel.cart_id)
            .join(BookModel, BookModel.id == CartItemModel.book_id)
            .where(CartModel.user_id == user_id, CartItemModel.deleted_at.is_(None))
            .order_by(CartItemModel.created_at.desc())
        )
        return list(self.db.execute(stmt).all())

    def get_cart_item_records(self, user_id: UUID) -> List[Row]:
        """Active lines with the catalog's current stock, for checkout."""
        stmt = (
            select(
                CartItemModel.book_id,
                CartItemModel.count.label("quantity"),
                CartItemModel.cart_price.label("unit_price"),
                BookModel.available_stock,
            )
            .join(CartModel, CartModel.id == CartItemModel.cart_id)
            .join(BookModel, BookModel.id == CartItemModel.book_id)
            .where(CartModel.user_id == user_id, CartItemModel.deleted_at.is_(None))
            .order_by(CartItemModel.created_at.desc())
        )
        return list(self.db.execute(stmt).all())

    def upsert_cart_item(self, cart_id: UUID, book_id: UUID, count: int, unit_price: Decimal) -> None:
        now = utc_now()
        stmt = dialect_insert(self.db, CartItemModel).values(
            cart_id=cart_id,
            book_id=book_id,
            count=count,
            cart_price=unit_price,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        #overwrite count and price, revive a soft-deleted line
        stmt = stmt.on_conflict_do_update(
            index_elements=["cart_id", "book_id"],
            set_={
                "count": stmt.excluded["count"],
                "cart_price": stmt.excluded["cart_price"],
                "updated_at": now,
                "deleted_at": None,
            },
        )
        self.db.execute(stmt)

    def remove_cart_item(self, cart_id: UUID, book_id: UUID) -> int:
        now = utc_now()
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.book_id == book_id,
                CartItemModel.deleted_at.is_(None),
            )
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def clear_cart(self, cart_id: UUID) -> int:
        now = utc_now()
        result = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
