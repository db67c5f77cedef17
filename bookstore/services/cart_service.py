# bookstore/services/cart_service.py
from typing import List
from uuid import UUID

from sqlalchemy import Row

from bookstore.data.models.cart import CartModel
from bookstore.data.transaction import TransactionScope
from bookstore.domain.errors import BookInactive, BookNotFound, InsufficientStock, InvalidCount
from bookstore.domain.pricing import ZERO, line_total, locked_unit_price, to_money
from bookstore.domain.principal import Principal
from bookstore.domain.schemas import CartItemOut, CartOut
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases for the authenticated user.

    The unit price of a line is computed from the catalog when the line is
    added or updated and stored with it. Later catalog price changes do not
    touch existing lines until the next update of that book.
    """

    def __init__(self, tx: TransactionScope):
        self.tx = tx

    #query
    def get_cart(self, principal: Principal) -> CartOut:
        with self.tx.begin() as uow:
            cart = uow.carts.get_or_create_cart(principal.user_id)
            items = uow.carts.get_cart_items(principal.user_id)
            return build_cart_view(cart, items)

    #commands
    def add_item(self, principal: Principal, book_id: UUID, count: int) -> CartOut:
        return self._upsert_item(principal, book_id, count)

    def update_item(self, principal: Principal, book_id: UUID, count: int) -> CartOut:
        return self._upsert_item(principal, book_id, count)

    def remove_item(self, principal: Principal, book_id: UUID) -> CartOut:
        """Soft-delete the line for book_id. Removing a book that is not in the cart is a no-op."""
        with self.tx.begin() as uow:
            cart = uow.carts.get_or_create_cart(principal.user_id)
            removed = uow.carts.remove_cart_item(cart.id, book_id)

            if removed:
                logger.info(f"Book {book_id} removed from cart {cart.id}")
            else:
                logger.debug(f"Book {book_id} not in cart {cart.id}, nothing to remove")

            items = uow.carts.get_cart_items(principal.user_id)
            return build_cart_view(cart, items)

    def clear(self, principal: Principal) -> None:
        with self.tx.begin() as uow:
            cart = uow.carts.get_or_create_cart(principal.user_id)
            cleared = uow.carts.clear_cart(cart.id)

        logger.info(f"Cart {cart.id} cleared ({cleared} lines)")

    def _upsert_item(self, principal: Principal, book_id: UUID, count: int) -> CartOut:
        if count <= 0:
            raise InvalidCount(count)

        with self.tx.begin() as uow:
            book = uow.books.find_by_id(book_id)

            if not book:
                raise BookNotFound(book_id)

            if not book.is_active:
                raise BookInactive(book_id)

            # early check only, stock is enforced again when the payment is confirmed
            if book.available_stock < count:
                logger.warning(
                    f"Book {book_id}: requested {count}, available {book.available_stock}"
                )
                raise InsufficientStock(book_id)

            unit_price = locked_unit_price(book.price, book.discount_percentage)

            cart = uow.carts.get_or_create_cart(principal.user_id)
            uow.carts.upsert_cart_item(cart.id, book.id, count, unit_price)

            logger.info(f"Cart {cart.id}: book {book_id} x{count} at {unit_price}")

            items = uow.carts.get_cart_items(principal.user_id)
            return build_cart_view(cart, items)


def build_cart_view(cart: CartModel, items: List[Row]) -> CartOut:
    lines = []
    subtotal = ZERO
    total_items = 0

    for i in items:
        unit_price = to_money(i.unit_price)
        total = line_total(unit_price, i.quantity)
        subtotal += total
        total_items += i.quantity
        lines.append(
            CartItemOut(
                book_id=i.book_id,
                name=i.name,
                author_name=i.author_name,
                image_url=i.image_url,
                unit_price=unit_price,
                count=i.quantity,
                line_total=total,
            )
        )

    return CartOut(
        cart_id=cart.id,
        user_id=cart.user_id,
        items=lines,
        subtotal=subtotal,
        total_items=total_items,
    )
