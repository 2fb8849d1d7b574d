#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from bazaar.data.models.user import UserModel
from bazaar.data.models.product import ProductModel
from bazaar.data.models.cart import CartModel
from bazaar.data.models.cart_item import CartItemModel
from bazaar.data.models.order import OrderModel
from bazaar.data.models.order_item import OrderItemModel
from bazaar.data.models.wishlist_item import WishlistItemModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "WishlistItemModel",
]
