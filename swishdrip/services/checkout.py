"""Checkout: turning item selections into priced, immutable orders.

Validation of the request as a whole is all-or-nothing, but products that
no longer exist are skipped one by one and reported back in
``CheckoutResult.skipped``. Stock for every included item is checked and
taken in the same transaction that writes the order, so an order is either
saved together with its stock decrements or not at all.
"""

import logging
from collections import namedtuple
from datetime import datetime
from decimal import Decimal

from swishdrip.extensions import db
from swishdrip.errors import NotFound, ValidationError
from swishdrip.models import Order, OrderItem, Product
from swishdrip.services import cart as cart_service
from swishdrip.services.inventory import reserve_stock, release_stock
from swishdrip.utils.helpers import parse_id, parse_quantity, normalize_size, pick
from swishdrip import notifications

logger = logging.getLogger(__name__)

CheckoutResult = namedtuple('CheckoutResult', ['order', 'skipped'])


def _required_text(value, field):
    if value is None or not str(value).strip():
        raise ValidationError(f'{field} is required')
    return str(value).strip()


def _parse_items(items):
    if not items or not isinstance(items, list):
        raise ValidationError('Order must contain at least one item')

    parsed = []
    for raw in items:
        if not isinstance(raw, dict):
            raise ValidationError('Each item must be an object')
        parsed.append({
            'product_id': parse_id(pick(raw, 'productId', 'product_id')),
            'size': normalize_size(pick(raw, 'size')),
            'quantity': parse_quantity(pick(raw, 'quantity')),
        })
    return parsed


def _lock_product(product_id):
    return (db.session.query(Product)
            .filter_by(id=product_id)
            .with_for_update()
            .first())


def _resolve_size(product, size):
    if not product.sizes:
        return None
    if size is None:
        raise ValidationError(f'A size is required for {product.name}')
    if product.find_size(size) is None:
        raise ValidationError(f'Size {size} is not available for {product.name}')
    return size


def place_order(user_id, customer_name, phone, location, items, empty_cart=False):
    """Create an order for ``user_id`` from ``[{productId, size, quantity}]``.

    Returns a ``CheckoutResult``. Raises ValidationError for missing contact
    fields, an empty item list or when no item resolves to a product, and
    InsufficientStock when any included item cannot be covered; nothing is
    persisted in those cases. With ``empty_cart`` the stored cart is cleared
    in the same transaction as the order.
    """
    customer_name = _required_text(customer_name, 'customerName')
    phone = _required_text(phone, 'phone')
    location = _required_text(location, 'location')
    requested = _parse_items(items)

    order = Order(
        order_number=Order.generate_order_number(),
        user_id=user_id,
        customer_name=customer_name,
        phone=phone,
        location=location,
        status=Order.STATUS_PENDING,
    )
    total = Decimal('0.00')
    skipped = []

    try:
        for item in requested:
            product = _lock_product(item['product_id'])
            if product is None or not product.is_active:
                skipped.append({
                    'productId': item['product_id'],
                    'size': item['size'],
                    'quantity': item['quantity'],
                })
                continue

            size = _resolve_size(product, item['size'])
            price = product.current_price
            reserve_stock(product, size, item['quantity'])

            total += price * item['quantity']
            order.items.append(OrderItem(
                product_id=product.id,
                name=product.name,
                size=size,
                quantity=item['quantity'],
                price=price
            ))

        if not order.items:
            raise ValidationError('No valid items in cart',
                                  payload={'skipped': skipped})

        order.total = total
        order.add_status_history(Order.STATUS_PENDING, 'Order placed')
        db.session.add(order)
        if empty_cart:
            cart_service.clear_cart(user_id, commit=False)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info('Order %s placed by user %s: %d item(s), total %s, %d skipped',
                order.order_number, user_id, len(order.items), order.total, len(skipped))
    notifications.order_placed(order)
    return CheckoutResult(order, skipped)


def checkout_cart(user_id, customer_name, phone, location):
    """Place an order for everything currently in the user's cart."""
    items = [{'productId': line.product_id, 'size': line.size, 'quantity': line.quantity}
             for line in cart_service.get_cart(user_id)]
    if not items:
        raise ValidationError('Your cart is empty')
    return place_order(user_id, customer_name, phone, location, items, empty_cart=True)


def get_order(order_id, user=None):
    """Load an order; non-admin users may only see their own."""
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFound('Order not found')
    if user is not None and not user.is_admin() and order.user_id != user.id:
        raise NotFound('Order not found')
    return order


def list_orders():
    """All orders, newest first."""
    return Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()


def list_user_orders(user_id):
    return (Order.query.filter_by(user_id=user_id)
            .order_by(Order.created_at.desc(), Order.id.desc()).all())


def mark_delivered(order_id):
    """Move a pending order to delivered; repeating it changes nothing."""
    order = get_order(order_id)
    if order.status == Order.STATUS_DELIVERED:
        return order
    if order.status != Order.STATUS_PENDING:
        raise ValidationError(f'Cannot deliver an order that is {order.status}')

    order.status = Order.STATUS_DELIVERED
    order.delivered_at = datetime.utcnow()
    order.add_status_history(Order.STATUS_DELIVERED, 'Order delivered')
    db.session.commit()

    logger.info('Order %s marked as delivered', order.order_number)
    notifications.order_status_changed(order)
    return order


def cancel_order(order_id, user=None, reason=None):
    """Cancel a pending order and put its stock back."""
    order = get_order(order_id, user)
    if not order.can_cancel():
        raise ValidationError('This order cannot be cancelled')

    reason = reason or 'Customer requested cancellation'
    for item in order.items:
        product = _lock_product(item.product_id)
        if product is not None:
            release_stock(product, item.size, item.quantity)

    order.status = Order.STATUS_CANCELLED
    order.cancelled_at = datetime.utcnow()
    order.cancellation_reason = reason
    order.add_status_history(Order.STATUS_CANCELLED, reason)
    db.session.commit()

    logger.info('Order %s cancelled: %s', order.order_number, reason)
    notifications.order_status_changed(order)
    return order
