#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from shop.data.models.user import UserModel
from shop.data.models.item import ItemModel
from shop.data.models.cart import CartModel
from shop.data.models.cart_line import CartLineModel
from shop.data.models.order import OrderModel
from shop.data.models.order_line import OrderLineModel

__all__ = [
    "UserModel",
    "ItemModel",
    "CartModel",
    "CartLineModel",
    "OrderModel",
    "OrderLineModel",
]
