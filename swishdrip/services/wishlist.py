"""Wishlist operations."""

from swishdrip.extensions import db
from swishdrip.errors import NotFound
from swishdrip.models import User
from swishdrip.services.catalog import get_product
from swishdrip.utils.helpers import parse_id


def _user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound('User not found')
    return user


def get_wishlist(user_id):
    return [p for p in _user(user_id).wishlist if p.is_active]


def add_to_wishlist(user_id, product_id):
    """Add a product; already wishlisted products are left alone."""
    product = get_product(parse_id(product_id))
    user = _user(user_id)
    if product not in user.wishlist:
        user.wishlist.append(product)
        db.session.commit()
    return get_wishlist(user_id)


def remove_from_wishlist(user_id, product_id):
    product_id = parse_id(product_id)
    user = _user(user_id)
    user.wishlist = [p for p in user.wishlist if p.id != product_id]
    db.session.commit()
    return get_wishlist(user_id)


def clear_wishlist(user_id):
    user = _user(user_id)
    user.wishlist = []
    db.session.commit()
    return []
