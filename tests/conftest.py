import os

# must be set before bookstore.utils.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"

from decimal import Decimal
from uuid import uuid4

import pytest

from bookstore.data.database import Base, make_engine, make_session_factory
from bookstore.data.models import BookModel
from bookstore.data.transaction import TransactionScope
from bookstore.domain.principal import Principal
from bookstore.services.cart_service import CartService
from bookstore.services.notification_service import NotificationService
from bookstore.services.order_service import OrderService


class RecordingDispatch:
    def __init__(self):
        self.calls = []

    def __call__(self, user_id, order_id, event):
        self.calls.append((user_id, order_id, event))

    @property
    def events(self):
        return [c[2] for c in self.calls]


@pytest.fixture()
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'bookstore.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def tx(session_factory):
    return TransactionScope(session_factory)


@pytest.fixture()
def dispatch():
    return RecordingDispatch()


@pytest.fixture()
def notifications(dispatch):
    return NotificationService(dispatch=dispatch)


@pytest.fixture()
def cart_service(tx):
    return CartService(tx)


@pytest.fixture()
def order_service(tx, notifications):
    return OrderService(tx, notifications)


@pytest.fixture()
def user():
    return Principal(user_id=uuid4())


@pytest.fixture()
def make_book(session_factory):
    def _make(price="40.00", discount="0", stock=10, active=True, name="Book"):
        book = BookModel(
            id=uuid4(),
            name=name,
            author_name="Some Author",
            price=Decimal(price),
            discount_percentage=Decimal(discount),
            available_stock=stock,
            is_active=active,
        )
        with session_factory.begin() as db:
            db.add(book)
        return book.id

    return _make


@pytest.fixture()
def book_field(session_factory):
    def _get(book_id, field="available_stock"):
        with session_factory() as db:
            return getattr(db.get(BookModel, book_id), field)

    return _get


@pytest.fixture()
def set_book(session_factory):
    def _set(book_id, **values):
        with session_factory.begin() as db:
            book = db.get(BookModel, book_id)
            for k, v in values.items():
                setattr(book, k, v)

    return _set
