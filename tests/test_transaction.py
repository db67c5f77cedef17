from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from bookstore.data.models import CartModel
from bookstore.domain.errors import TransientError
from bookstore.utils.clock import utc_now


def _cart_count(session_factory):
    with session_factory() as db:
        return db.query(CartModel).count()


def test_commits_on_success(tx, session_factory):
    user_id = uuid4()

    cart_id = tx.run(lambda uow: uow.carts.get_or_create_cart(user_id).id)

    with session_factory() as db:
        assert db.get(CartModel, cart_id).user_id == user_id


def test_rolls_back_every_store_on_error(tx, session_factory, make_book, book_field):
    book_id = make_book(stock=5)

    with pytest.raises(RuntimeError, match="boom"):
        with tx.begin() as uow:
            uow.carts.get_or_create_cart(uuid4())
            assert uow.books.conditional_decrement_stock(book_id, 2)
            raise RuntimeError("boom")

    assert _cart_count(session_factory) == 0
    assert book_field(book_id) == 5


def test_stores_share_one_session(tx):
    with tx.begin() as uow:
        assert uow.carts.db is uow.session
        assert uow.orders.db is uow.session
        assert uow.orders.books.db is uow.session


def test_scopes_do_not_nest(tx):
    with tx.begin():
        with pytest.raises(RuntimeError, match="do not nest"):
            with tx.begin():
                pass

    # the outer scope released its slot
    with tx.begin():
        pass


def test_store_outage_becomes_transient_error(tx, session_factory):
    def fail(uow):
        uow.carts.get_or_create_cart(uuid4())
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    with pytest.raises(TransientError):
        tx.run(fail)

    assert _cart_count(session_factory) == 0


def test_conditional_decrement(tx, make_book, book_field):
    book_id = make_book(stock=3)

    with tx.begin() as uow:
        assert uow.books.conditional_decrement_stock(book_id, 3) is True
        assert uow.books.conditional_decrement_stock(book_id, 1) is False

    assert book_field(book_id) == 0


def test_get_or_create_cart_is_idempotent(tx, session_factory):
    user_id = uuid4()

    first = tx.run(lambda uow: uow.carts.get_or_create_cart(user_id).id)
    second = tx.run(lambda uow: uow.carts.get_or_create_cart(user_id).id)

    assert first == second
    assert _cart_count(session_factory) == 1


def test_timestamps_are_utc():
    assert utc_now().utcoffset() == timedelta(0)
