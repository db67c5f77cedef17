# bookstore/domain/errors.py
from uuid import UUID


class BookstoreError(Exception):
    """Base for every error the checkout core raises on purpose."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookstoreError, ValueError):
    status_code = 422


class NotFoundError(BookstoreError, LookupError):
    status_code = 404


class StateError(BookstoreError):
    status_code = 409


class ConflictError(BookstoreError):
    status_code = 409


class TransientError(BookstoreError):
    """Store unavailable. The transaction was rolled back; the caller may retry."""

    status_code = 503


class InvalidCount(ValidationError):
    def __init__(self, count: int):
        super().__init__(f"count must be greater than 0, got {count}")
        self.count = count


class BookNotFound(NotFoundError):
    def __init__(self, book_id: UUID):
        super().__init__(f"book {book_id} not found")
        self.book_id = book_id


class OrderNotFound(NotFoundError):
    def __init__(self, order_id: UUID):
        super().__init__(f"order {order_id} not found")
        self.order_id = order_id


class BookInactive(StateError):
    def __init__(self, book_id: UUID):
        super().__init__(f"book {book_id} is not active")
        self.book_id = book_id


class InsufficientStock(StateError):
    def __init__(self, book_id: UUID):
        super().__init__(f"insufficient stock for book {book_id}")
        self.book_id = book_id


class EmptyCart(StateError):
    def __init__(self):
        super().__init__("cart is empty")


class OrderNotPending(StateError):
    def __init__(self, order_id: UUID, status: str):
        super().__init__(f"order {order_id} is already {status}")
        self.order_id = order_id
        self.status = status


class Forbidden(StateError, PermissionError):
    status_code = 403


class OrderNumberConflict(ConflictError):
    def __init__(self, order_number: str):
        super().__init__(f"order number {order_number} already exists")
        self.order_number = order_number
