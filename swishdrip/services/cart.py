"""Shopping cart operations.

Each call loads, mutates and commits one user's cart lines as a unit. Lines
are keyed by ``(product_id, size)``; the price stored on a line is the price
seen at add time and is only for display, checkout always re-prices.
"""

import logging

from swishdrip.extensions import db
from swishdrip.errors import NotFound, ValidationError, InsufficientStock
from swishdrip.models import CartItem, Order, Product
from swishdrip.services.inventory import check_available
from swishdrip.utils.helpers import parse_id, parse_quantity, normalize_size, pick

logger = logging.getLogger(__name__)


def get_cart(user_id):
    """Return the user's cart lines in the order they were added."""
    return CartItem.query.filter_by(user_id=user_id).order_by(CartItem.id).all()


def _find_line(user_id, product_id, size):
    for item in get_cart(user_id):
        if item.matches(product_id, size):
            return item
    return None


def resolve_product(product_id):
    """Active product or NotFound."""
    product = db.session.get(Product, product_id)
    if product is None or not product.is_active:
        raise NotFound('Product not found')
    return product


def resolve_size(product, size):
    """Match ``size`` against the product's size variants.

    Sized products need a known size; unsized products ignore it.
    """
    size = normalize_size(size)
    if not product.sizes:
        return None
    if size is None:
        raise ValidationError(f'A size is required for {product.name}')
    if product.find_size(size) is None:
        raise NotFound(f'Size {size} not found for {product.name}')
    return size


def add_item(user_id, product_id, size=None, quantity=1):
    """Add a product to the cart, merging with an existing line."""
    product_id = parse_id(product_id)
    quantity = parse_quantity(1 if quantity is None else quantity)
    product = resolve_product(product_id)
    size = resolve_size(product, size)

    check_available(product, size, quantity)

    line = _find_line(user_id, product_id, size)
    if line:
        line.quantity += quantity
    else:
        line = CartItem(
            user_id=user_id,
            product_id=product_id,
            size=size,
            quantity=quantity,
            price=product.current_price
        )
        db.session.add(line)

    db.session.commit()
    logger.debug('User %s added product %s (size %s) x %s to cart',
                 user_id, product_id, size, quantity)
    return get_cart(user_id)


def update_item(user_id, product_id, size=None, quantity=None):
    """Set a line's quantity; zero or less removes the line."""
    product_id = parse_id(product_id)
    if quantity is None or quantity == '':
        raise ValidationError('quantity is required')
    quantity = parse_quantity(quantity, minimum=None)

    line = _find_line(user_id, product_id, normalize_size(size))
    if not line:
        raise NotFound('Item not in cart')

    if quantity <= 0:
        db.session.delete(line)
    else:
        line.quantity = quantity

    db.session.commit()
    return get_cart(user_id)


def remove_item(user_id, product_id, size=None):
    """Remove one line from the cart."""
    return update_item(user_id, product_id, size, 0)


def clear_cart(user_id, commit=True):
    """Empty the cart; clearing an empty cart is fine."""
    CartItem.query.filter_by(user_id=user_id).delete()
    if commit:
        db.session.commit()
    return []


def sync_cart(user_id, items):
    """Merge a client-side cart copy into the stored cart.

    Quantities merge as ``max(stored, client)`` so re-sending the same copy
    does not double anything. Lines that cannot be honoured are returned in
    ``skipped`` with a reason instead of failing the whole sync.
    """
    if not isinstance(items, list):
        raise ValidationError('items must be a list')

    skipped = []
    for raw in items:
        if not isinstance(raw, dict):
            raise ValidationError('Each item must be an object')
        product_id = parse_id(pick(raw, 'productId', 'product_id'))
        quantity = parse_quantity(pick(raw, 'quantity', default=1))
        try:
            product = resolve_product(product_id)
            size = resolve_size(product, pick(raw, 'size'))
            line = _find_line(user_id, product_id, size)
            target = max(line.quantity if line else 0, quantity)
            check_available(product, size, target)
        except (NotFound, ValidationError, InsufficientStock) as exc:
            skipped.append({
                'productId': product_id,
                'size': pick(raw, 'size'),
                'quantity': quantity,
                'reason': exc.message,
            })
            continue

        if line:
            line.quantity = target
        else:
            db.session.add(CartItem(
                user_id=user_id,
                product_id=product_id,
                size=size,
                quantity=target,
                price=product.current_price
            ))
        db.session.flush()

    db.session.commit()
    if skipped:
        logger.info('Cart sync for user %s skipped %d item(s)', user_id, len(skipped))
    return get_cart(user_id), skipped


def reorder(user, order_id):
    """Add every line of a past order to ``user``'s cart at today's price.

    Lines whose product, size or stock is gone are returned in ``skipped``
    with a reason; the rest are added through ``add_item``.
    """
    order = db.session.get(Order, parse_id(order_id, field='orderId'))
    if order is None or (not user.is_admin() and order.user_id != user.id):
        raise NotFound('Order not found')

    skipped = []
    for item in order.items:
        try:
            add_item(user.id, item.product_id, item.size, item.quantity)
        except (NotFound, ValidationError, InsufficientStock) as exc:
            skipped.append({
                'productId': item.product_id,
                'name': item.name,
                'size': item.size,
                'quantity': item.quantity,
                'reason': exc.message,
            })

    logger.info('User %s reordered order %s: %d item(s) skipped',
                user.id, order.order_number, len(skipped))
    return get_cart(user.id), skipped
