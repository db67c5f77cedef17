from decimal import Decimal
from uuid import uuid4

import pytest

from bookstore.data.models import CartItemModel
from bookstore.domain.errors import BookInactive, BookNotFound, InsufficientStock, InvalidCount
from bookstore.domain.principal import Principal


class TestGetCart:
    def test_creates_empty_cart_on_first_access(self, cart_service, user):
        cart = cart_service.get_cart(user)

        assert cart.user_id == user.user_id
        assert cart.items == []
        assert cart.subtotal == Decimal("0.00")
        assert cart.total_items == 0

    def test_same_cart_every_time(self, cart_service, user):
        assert cart_service.get_cart(user).cart_id == cart_service.get_cart(user).cart_id

    def test_users_get_separate_carts(self, cart_service, user):
        other = Principal(user_id=uuid4())
        assert cart_service.get_cart(user).cart_id != cart_service.get_cart(other).cart_id

    def test_subtotal_and_total_items(self, cart_service, user, make_book):
        a = make_book(price="40.00")
        b = make_book(price="15.50")

        cart_service.add_item(user, a, 2)
        cart = cart_service.add_item(user, b, 1)

        assert cart.subtotal == Decimal("95.50")
        assert cart.total_items == 3
        assert {i.book_id: i.line_total for i in cart.items} == {
            a: Decimal("80.00"),
            b: Decimal("15.50"),
        }


class TestAddItem:
    def test_discounted_price_is_locked(self, cart_service, user, make_book):
        book_id = make_book(price="59.99", discount="15")

        cart = cart_service.add_item(user, book_id, 2)

        [line] = cart.items
        assert line.book_id == book_id
        assert line.count == 2
        assert line.unit_price == Decimal("50.99")
        assert line.line_total == Decimal("101.98")

    def test_catalog_price_change_does_not_touch_existing_line(
        self, cart_service, user, make_book, set_book
    ):
        book_id = make_book(price="20.00")
        cart_service.add_item(user, book_id, 1)

        set_book(book_id, price=Decimal("35.00"))

        [line] = cart_service.get_cart(user).items
        assert line.unit_price == Decimal("20.00")

        # the next update re-locks at the current price
        [line] = cart_service.update_item(user, book_id, 1).items
        assert line.unit_price == Decimal("35.00")

    def test_adding_same_book_twice_overwrites_count(self, cart_service, user, make_book):
        book_id = make_book()

        cart_service.add_item(user, book_id, 2)
        cart = cart_service.add_item(user, book_id, 5)

        assert len(cart.items) == 1
        assert cart.items[0].count == 5

    @pytest.mark.parametrize("count", [0, -1])
    def test_count_must_be_positive(self, cart_service, user, make_book, count):
        book_id = make_book()

        with pytest.raises(InvalidCount):
            cart_service.add_item(user, book_id, count)

    def test_unknown_book(self, cart_service, user):
        with pytest.raises(BookNotFound):
            cart_service.add_item(user, uuid4(), 1)

    def test_inactive_book(self, cart_service, user, make_book):
        book_id = make_book(active=False)

        with pytest.raises(BookInactive):
            cart_service.add_item(user, book_id, 1)

    def test_count_above_stock(self, cart_service, user, make_book):
        book_id = make_book(stock=2)

        with pytest.raises(InsufficientStock) as exc:
            cart_service.add_item(user, book_id, 3)

        assert exc.value.book_id == book_id
        assert cart_service.get_cart(user).items == []


class TestUpdateItem:
    def test_update_changes_count(self, cart_service, user, make_book):
        book_id = make_book()
        cart_service.add_item(user, book_id, 1)

        cart = cart_service.update_item(user, book_id, 4)

        assert cart.items[0].count == 4

    def test_update_of_absent_book_adds_it(self, cart_service, user, make_book):
        book_id = make_book()

        cart = cart_service.update_item(user, book_id, 2)

        assert [(i.book_id, i.count) for i in cart.items] == [(book_id, 2)]


class TestRemoveItem:
    def test_remove_soft_deletes_line(self, cart_service, user, make_book, session_factory):
        book_id = make_book()
        cart_service.add_item(user, book_id, 1)

        cart = cart_service.remove_item(user, book_id)

        assert cart.items == []
        with session_factory() as db:
            row = db.get(CartItemModel, (cart.cart_id, book_id))
            assert row is not None
            assert row.deleted_at is not None

    def test_removing_absent_book_is_a_noop(self, cart_service, user, make_book):
        kept = make_book()
        cart_service.add_item(user, kept, 1)

        cart = cart_service.remove_item(user, uuid4())

        assert [i.book_id for i in cart.items] == [kept]

    def test_removing_twice_is_a_noop(self, cart_service, user, make_book):
        book_id = make_book()
        cart_service.add_item(user, book_id, 1)
        cart_service.remove_item(user, book_id)

        assert cart_service.remove_item(user, book_id).items == []

    def test_re_adding_removed_book_revives_line(self, cart_service, user, make_book):
        book_id = make_book()
        cart_service.add_item(user, book_id, 1)
        cart_service.remove_item(user, book_id)

        cart = cart_service.add_item(user, book_id, 3)

        assert [(i.book_id, i.count) for i in cart.items] == [(book_id, 3)]


class TestClear:
    def test_clear_removes_every_line(self, cart_service, user, make_book):
        cart_service.add_item(user, make_book(), 1)
        cart_service.add_item(user, make_book(), 2)

        assert cart_service.clear(user) is None
        assert cart_service.get_cart(user).items == []

    def test_clear_only_touches_own_cart(self, cart_service, user, make_book):
        other = Principal(user_id=uuid4())
        book_id = make_book()
        cart_service.add_item(other, book_id, 1)

        cart_service.clear(user)

        assert len(cart_service.get_cart(other).items) == 1
