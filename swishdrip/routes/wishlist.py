"""Wishlist routes."""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from swishdrip.services import wishlist as wishlist_service
from swishdrip.utils.helpers import json_body, pick

wishlist_bp = Blueprint('wishlist', __name__)


def _wishlist_response(products, message=None):
    payload = {'success': True, 'wishlist': [p.to_dict() for p in products]}
    if message:
        payload['message'] = message
    return jsonify(payload)


@wishlist_bp.route('/')
@login_required
def get_wishlist():
    return _wishlist_response(wishlist_service.get_wishlist(current_user.id))


@wishlist_bp.route('/add', methods=['POST'])
@login_required
def add_to_wishlist():
    data = json_body()
    products = wishlist_service.add_to_wishlist(current_user.id, pick(data, 'productId', 'product_id'))
    return _wishlist_response(products, 'Product added to wishlist')


@wishlist_bp.route('/remove', methods=['POST'])
@login_required
def remove_from_wishlist():
    data = json_body()
    products = wishlist_service.remove_from_wishlist(current_user.id, pick(data, 'productId', 'product_id'))
    return _wishlist_response(products, 'Product removed from wishlist')


@wishlist_bp.route('/clear', methods=['POST'])
@login_required
def clear_wishlist():
    wishlist_service.clear_wishlist(current_user.id)
    return _wishlist_response([], 'Wishlist cleared')
