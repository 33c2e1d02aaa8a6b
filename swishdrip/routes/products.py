"""Catalog routes and admin product management."""

from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required
from swishdrip.services import catalog, inventory
from swishdrip.utils.decorators import admin_required
from swishdrip.utils.helpers import json_body, pick

products_bp = Blueprint('products', __name__)


@products_bp.route('/')
def list_products():
    """Get all active products."""
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('perPage', current_app.config['ITEMS_PER_PAGE'], type=int)
    pagination = catalog.list_products(
        category=request.args.get('category') or None,
        on_sale=request.args.get('onSale') == 'true',
        page=page,
        per_page=per_page
    )
    return jsonify({
        'success': True,
        'count': pagination.total,
        'page': pagination.page,
        'pages': pagination.pages,
        'products': [p.to_dict() for p in pagination.items]
    })


@products_bp.route('/<int:product_id>')
def get_product(product_id):
    """Get a single product."""
    product = catalog.get_product(product_id)
    return jsonify({'success': True, 'product': product.to_dict()})


@products_bp.route('/', methods=['POST'])
@login_required
@admin_required
def create_product():
    """Add product."""
    product = catalog.create_product(json_body())
    return jsonify({
        'success': True,
        'message': 'Product created successfully',
        'product': product.to_dict()
    }), 201


@products_bp.route('/<int:product_id>', methods=['PUT'])
@login_required
@admin_required
def update_product(product_id):
    """Update product."""
    product = catalog.update_product(product_id, json_body())
    return jsonify({
        'success': True,
        'message': 'Product updated successfully',
        'product': product.to_dict()
    })


@products_bp.route('/<int:product_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_product(product_id):
    """Soft delete product."""
    catalog.deactivate_product(product_id)
    return jsonify({'success': True, 'message': 'Product deleted successfully'})


def _stock_payload(product):
    return {
        'id': product.id,
        'name': product.name,
        'inStock': product.in_stock,
        'sizes': [s.to_dict() for s in product.sizes],
    }


@products_bp.route('/<int:product_id>/stock', methods=['PATCH'])
@login_required
@admin_required
def reduce_stock(product_id):
    """Decrease stock of one size."""
    data = json_body()
    product = inventory.decrease_stock(product_id, pick(data, 'size'), pick(data, 'quantity', default=1))
    return jsonify({
        'success': True,
        'message': 'Stock reduced successfully',
        'product': _stock_payload(product)
    })


@products_bp.route('/<int:product_id>/restock', methods=['PATCH'])
@login_required
@admin_required
def restock(product_id):
    """Increase stock of one size."""
    data = json_body()
    product = inventory.increase_stock(product_id, pick(data, 'size'), pick(data, 'quantity', default=1))
    return jsonify({
        'success': True,
        'message': 'Stock increased successfully',
        'product': _stock_payload(product)
    })
