# bookstore/services/order_service.py
import secrets
from decimal import Decimal
from typing import List
from uuid import UUID, uuid4

from bookstore.data.models.order import OrderModel
from bookstore.data.models.order_item import OrderItemModel
from bookstore.data.transaction import TransactionScope, UnitOfWork
from bookstore.domain.enums import OrderEvent, OrderStatus, PaymentMethod, PaymentStatus
from bookstore.domain.errors import EmptyCart, Forbidden, InsufficientStock, OrderNotFound, OrderNotPending
from bookstore.domain.pricing import ZERO, line_total, to_money
from bookstore.domain.principal import Principal
from bookstore.domain.schemas import OrderItemOut, OrderOut, OrderView
from bookstore.services.notification_service import NotificationService
from bookstore.utils.clock import utc_now
from bookstore.utils.logging import get_logger
from bookstore.utils.retry import conflict_retry
from bookstore.utils.settings import ORDER_NUMBER_PREFIX

logger = get_logger(__name__)


def generate_order_number() -> str:
    stamp = utc_now().strftime("%Y%m%d%H%M%S")
    return f"{ORDER_NUMBER_PREFIX}-{stamp}-{secrets.token_hex(4).upper()}"


class OrderService:
    """
    Checkout and payment confirmation.

    checkout turns the cart into a PENDING order. Stock is not touched and the
    cart is kept, so a failed payment can be retried without re-adding items.
    confirm_payment moves the order to a terminal state; on success it takes
    the stock (guarded decrement) and clears the cart.
    """

    def __init__(self, tx: TransactionScope, notifications: NotificationService):
        self.tx = tx
        self.notifications = notifications

    def checkout(self, principal: Principal, payment_method: PaymentMethod) -> OrderView:
        """
        Use case: cart -> order, all or nothing.

        1. get or create the cart
        2. load lines with the current stock
        3. reject an empty cart
        4. reject the whole checkout if any line exceeds stock
        5. total from the locked cart prices
        6-8. insert order and its lines
        """
        user_id = principal.user_id

        with self.tx.begin() as uow:
            cart = uow.carts.get_or_create_cart(user_id)
            records = uow.carts.get_cart_item_records(user_id)

            if not records:
                raise EmptyCart()

            total = ZERO
            lines = []
            for r in records:
                if r.available_stock < r.quantity:
                    logger.warning(
                        f"Checkout for cart {cart.id} rejected: book {r.book_id} "
                        f"requested {r.quantity}, available {r.available_stock}"
                    )
                    raise InsufficientStock(r.book_id)

                unit_price = to_money(r.unit_price)
                lt = line_total(unit_price, r.quantity)
                total += lt
                lines.append((r.book_id, r.quantity, unit_price, lt))

            order = self._insert_order(uow, user_id, total, payment_method)

            uow.orders.create_order_items(
                [
                    OrderItemModel(
                        order_id=order.id,
                        book_id=book_id,
                        purchase_count=count,
                        purchase_price=unit_price,
                        total_price=lt,
                    )
                    for book_id, count, unit_price, lt in lines
                ]
            )

            view = build_order_view(uow, order)

        logger.info(f"Order {order.order_number} created from cart {cart.id}, total {total}")
        self.notifications.send_order_notification(user_id, order.id, OrderEvent.PLACED)
        return view

    def confirm_payment(self, principal: Principal, order_id: UUID, success: bool) -> OrderView:
        with self.tx.begin() as uow:
            order = uow.orders.get_order(order_id)

            if not order:
                raise OrderNotFound(order_id)

            if order.user_id != principal.user_id:
                raise Forbidden("not authorized to confirm this order")

            if order.status != OrderStatus.PENDING.value:
                raise OrderNotPending(order.id, order.status)

            items = uow.orders.get_order_items(order.id)

            if success:
                self._finalize(uow, order, OrderStatus.COMPLETED, PaymentStatus.PAID)

                # stock may have been taken by other orders since checkout
                uow.orders.decrement_stock(items)

                cart = uow.carts.get_or_create_cart(principal.user_id)
                uow.carts.clear_cart(cart.id)
            else:
                self._finalize(uow, order, OrderStatus.CANCELLED, PaymentStatus.FAILED)

            updated = uow.orders.get_order(order.id, refresh=True)
            view = build_order_view(uow, updated)

        event = OrderEvent.COMPLETED if success else OrderEvent.CANCELLED
        logger.info(f"Order {updated.order_number} {updated.status}, payment {updated.payment_status}")
        self.notifications.send_order_notification(principal.user_id, updated.id, event)
        return view

    def get_order(self, principal: Principal, order_id: UUID) -> OrderView:
        with self.tx.begin() as uow:
            order = uow.orders.get_order(order_id)

            if not order:
                raise OrderNotFound(order_id)

            if order.user_id != principal.user_id and not principal.is_admin:
                raise Forbidden("not authorized to view this order")

            return build_order_view(uow, order)

    def list_user_orders(self, principal: Principal, limit: int, offset: int) -> List[OrderView]:
        with self.tx.begin() as uow:
            orders = uow.orders.list_orders_by_user(principal.user_id, limit, offset)
            return [build_order_view(uow, o) for o in orders]

    def list_all_orders(self, principal: Principal, limit: int, offset: int) -> List[OrderView]:
        if not principal.is_admin:
            raise Forbidden("admin role required")

        with self.tx.begin() as uow:
            orders = uow.orders.list_orders(limit, offset)
            return [build_order_view(uow, o) for o in orders]

    @conflict_retry()
    def _insert_order(
        self,
        uow: UnitOfWork,
        user_id: UUID,
        total: Decimal,
        payment_method: PaymentMethod,
    ) -> OrderModel:
        order = OrderModel(
            id=uuid4(),
            order_number=generate_order_number(),
            user_id=user_id,
            total_price=total,
            payment_method=payment_method.value,
            payment_status=PaymentStatus.PENDING.value,
            status=OrderStatus.PENDING.value,
        )
        return uow.orders.create_order(order)

    def _finalize(
        self,
        uow: UnitOfWork,
        order: OrderModel,
        status: OrderStatus,
        payment_status: PaymentStatus,
    ) -> None:
        # conditional on status = PENDING, a concurrent confirmation of the same order loses here
        if not uow.orders.transition_order(order.id, status, payment_status):
            current = uow.orders.get_order(order.id, refresh=True)
            raise OrderNotPending(order.id, current.status)


def build_order_view(uow: UnitOfWork, order: OrderModel) -> OrderView:
    items = uow.orders.get_order_items(order.id)
    return OrderView(
        order=OrderOut.model_validate(order),
        items=[
            OrderItemOut(
                book_id=i.book_id,
                name=i.name,
                image_url=i.image_url,
                unit_price=i.unit_price,
                count=i.quantity,
                line_total=i.line_total,
            )
            for i in items
        ],
    )
