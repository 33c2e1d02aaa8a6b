"""Cart routes."""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from swishdrip.forms.orders import CheckoutForm
from swishdrip.services import cart as cart_service
from swishdrip.services import checkout
from swishdrip.utils.helpers import json_body, pick

cart_bp = Blueprint('cart', __name__)


def _cart_response(items, **extra):
    payload = {
        'success': True,
        'items': [item.to_dict() for item in items],
        'count': len(items),
    }
    payload.update(extra)
    return jsonify(payload)


@cart_bp.route('/')
@login_required
def view_cart():
    """Get the user's cart."""
    return _cart_response(cart_service.get_cart(current_user.id))


@cart_bp.route('/add', methods=['POST'])
@login_required
def add_to_cart():
    """Add product to cart."""
    data = json_body()
    items = cart_service.add_item(
        current_user.id,
        pick(data, 'productId', 'product_id'),
        size=pick(data, 'size'),
        quantity=pick(data, 'quantity')
    )
    return _cart_response(items)


@cart_bp.route('/update', methods=['POST'])
@login_required
def update_cart():
    """Update cart item quantity."""
    data = json_body()
    items = cart_service.update_item(
        current_user.id,
        pick(data, 'productId', 'product_id'),
        size=pick(data, 'size'),
        quantity=pick(data, 'quantity')
    )
    return _cart_response(items)


@cart_bp.route('/remove', methods=['POST'])
@login_required
def remove_from_cart():
    """Remove item from cart."""
    data = json_body()
    items = cart_service.remove_item(
        current_user.id,
        pick(data, 'productId', 'product_id'),
        size=pick(data, 'size')
    )
    return _cart_response(items)


@cart_bp.route('/clear', methods=['POST'])
@login_required
def clear_cart():
    """Clear all items from cart."""
    cart_service.clear_cart(current_user.id)
    return _cart_response([], message='Cart cleared')


@cart_bp.route('/sync', methods=['POST'])
@login_required
def sync_cart():
    """Merge the browser's cart copy into the stored cart."""
    data = json_body()
    items, skipped = cart_service.sync_cart(current_user.id, pick(data, 'items', default=[]))
    return _cart_response(items, skipped=skipped)


@cart_bp.route('/checkout', methods=['POST'])
@login_required
def checkout_cart():
    """Place an order for the stored cart."""
    form = CheckoutForm().validate_or_raise()
    result = checkout.checkout_cart(
        current_user.id,
        form.customerName.data,
        form.phone.data,
        form.location.data
    )
    return jsonify({
        'success': True,
        'message': 'Order created',
        'order': result.order.to_dict(),
        'skipped': result.skipped
    }), 201
