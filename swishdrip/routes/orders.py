"""Order routes."""

from flask import Blueprint, jsonify, current_app
from flask_login import login_required, current_user
from swishdrip.forms.orders import CheckoutForm, CancelOrderForm
from swishdrip.services import cart as cart_service
from swishdrip.services import checkout
from swishdrip.utils.decorators import admin_required
from swishdrip.utils.helpers import json_body

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('/', methods=['POST'])
@login_required
def create_order():
    """Create an order from an explicit item list."""
    form = CheckoutForm().validate_or_raise()
    data = json_body()
    result = checkout.place_order(
        current_user.id,
        form.customerName.data,
        form.phone.data,
        form.location.data,
        data.get('items')
    )
    if result.skipped:
        current_app.logger.warning('Order %s created without %d unavailable item(s)',
                                   result.order.order_number, len(result.skipped))
    return jsonify({
        'success': True,
        'message': 'Order created',
        'order': result.order.to_dict(),
        'skipped': result.skipped
    }), 201


@orders_bp.route('/')
@login_required
@admin_required
def list_orders():
    """All orders, newest first."""
    return jsonify([order.to_dict() for order in checkout.list_orders()])


@orders_bp.route('/mine')
@login_required
def my_orders():
    """Order history of the current user."""
    orders = checkout.list_user_orders(current_user.id)
    return jsonify({'success': True, 'orders': [order.to_dict() for order in orders]})


@orders_bp.route('/<int:order_id>')
@login_required
def order_detail(order_id):
    """Order detail with status history."""
    order = checkout.get_order(order_id, current_user)
    return jsonify({'success': True, 'order': order.to_dict(include_history=True)})


@orders_bp.route('/<int:order_id>/deliver', methods=['PUT'])
@login_required
@admin_required
def deliver_order(order_id):
    """Mark order as delivered."""
    order = checkout.mark_delivered(order_id)
    return jsonify({
        'success': True,
        'message': 'Order marked as delivered',
        'order': order.to_dict()
    })


@orders_bp.route('/<int:order_id>/cancel', methods=['POST'])
@login_required
def cancel_order(order_id):
    """Cancel a pending order."""
    form = CancelOrderForm().validate_or_raise()
    order = checkout.cancel_order(order_id, current_user, reason=form.reason.data)
    return jsonify({
        'success': True,
        'message': 'Order cancelled successfully',
        'order': order.to_dict()
    })


@orders_bp.route('/<int:order_id>/reorder', methods=['POST'])
@login_required
def reorder(order_id):
    """Put the items of a past order back into the cart."""
    items, skipped = cart_service.reorder(current_user, order_id)
    return jsonify({
        'success': True,
        'message': 'Items added to cart for reorder',
        'items': [item.to_dict() for item in items],
        'count': len(items),
        'skipped': skipped
    })
