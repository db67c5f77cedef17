#import every model so SQLAlchemy registers it in Base.metadata

from bookstore.data.models.book import BookModel
from bookstore.data.models.cart import CartModel
from bookstore.data.models.cart_item import CartItemModel
from bookstore.data.models.order import OrderModel
from bookstore.data.models.order_item import OrderItemModel

__all__ = ["BookModel", "CartModel", "CartItemModel", "OrderModel", "OrderItemModel"]
