# bookstore/repos/book_repo.py
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from bookstore.data.models.book import BookModel
from bookstore.utils.clock import utc_now


class BookRepo:
    """Read side of the catalog plus the guarded stock decrement."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, book_id: UUID) -> BookModel | None:
        return self.db.get(BookModel, book_id)

    def conditional_decrement_stock(self, book_id: UUID, count: int) -> bool:
        # UPDATE books SET available_stock = available_stock - n WHERE id = ? AND available_stock >= n
        result = self.db.execute(
            update(BookModel)
            .where(BookModel.id == book_id, BookModel.available_stock >= count)
            .values(
                available_stock=BookModel.available_stock - count,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
