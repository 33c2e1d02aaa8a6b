"""Database models package."""

from .user import User, wishlist_items
from .product import Product, ProductSize
from .cart import CartItem
from .order import Order, OrderItem, OrderStatusHistory

__all__ = [
    'User',
    'wishlist_items',
    'Product',
    'ProductSize',
    'CartItem',
    'Order',
    'OrderItem',
    'OrderStatusHistory',
]
