# bookstore/data/transaction.py
"""
Unit-of-work boundary for the checkout core.

A scope opens one Session and one database transaction. Every store handed to
the caller through the UnitOfWork is bound to that same Session, so all of
their writes commit together or roll back together. Stores never commit.
"""
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from bookstore.domain.errors import TransientError
from bookstore.repos.book_repo import BookRepo
from bookstore.repos.cart_repo import CartRepo
from bookstore.repos.order_repo import OrderRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class UnitOfWork:
    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepo(session)
        self.carts = CartRepo(session)
        self.orders = OrderRepo(session)


class TransactionScope:
    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory
        self._local = threading.local()

    @contextmanager
    def begin(self) -> Iterator[UnitOfWork]:
        if getattr(self._local, "active", False):
            raise RuntimeError("transaction scopes do not nest")

        self._local.active = True
        session = self.session_factory()
        try:
            # commit on clean exit, rollback on any exception
            with session.begin():
                yield UnitOfWork(session)
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Store unavailable, transaction rolled back: {e}")
            raise TransientError("store unavailable, try again") from e
        finally:
            session.close()
            self._local.active = False

    def run(self, callback: Callable[[UnitOfWork], T]) -> T:
        with self.begin() as uow:
            return callback(uow)
