"""Per-size stock adjustments."""

import logging
from datetime import datetime

from swishdrip.extensions import db
from swishdrip.errors import NotFound, InsufficientStock
from swishdrip.models import Product
from swishdrip.utils.helpers import parse_quantity, normalize_size

logger = logging.getLogger(__name__)


def _load_product(product_id):
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFound('Product not found')
    return product


def _size_entry(product, size):
    entry = product.find_size(normalize_size(size))
    if entry is None:
        raise NotFound(f'Size {size} not found' if size else 'Size not found')
    return entry


def decrease_stock(product_id, size=None, quantity=1, commit=True):
    """Reduce stock when an item is sold, never going below zero.

    Products without sizes are saved unchanged.
    """
    quantity = parse_quantity(quantity)
    product = _load_product(product_id)

    if product.sizes:
        entry = _size_entry(product, size)
        entry.stock = max(0, entry.stock - quantity)
        product.purchase_count = (product.purchase_count or 0) + quantity
        logger.info('Stock of product %s size %s decreased by %s to %s',
                    product.id, entry.size, quantity, entry.stock)
    product.updated_at = datetime.utcnow()

    if commit:
        db.session.commit()
    return product


def increase_stock(product_id, size=None, quantity=1, commit=True):
    """Restock a size variant. Products without sizes are saved unchanged."""
    quantity = parse_quantity(quantity)
    product = _load_product(product_id)

    if product.sizes:
        entry = _size_entry(product, size)
        entry.stock = (entry.stock or 0) + quantity
        logger.info('Stock of product %s size %s increased by %s to %s',
                    product.id, entry.size, quantity, entry.stock)
    product.updated_at = datetime.utcnow()

    if commit:
        db.session.commit()
    return product


def check_available(product, size, quantity):
    """Raise InsufficientStock unless ``quantity`` units can be sold.

    ``size`` must already be resolved against the product's sizes.
    """
    if product.sizes:
        entry = product.find_size(size)
        available = entry.stock if entry is not None else 0
    else:
        available = quantity if product.in_stock else 0
    if available < quantity:
        raise InsufficientStock(product.id, size, quantity, available)


def reserve_stock(product, size, quantity):
    """Strict decrement used at checkout; the caller owns the transaction."""
    check_available(product, size, quantity)
    if product.sizes:
        entry = product.find_size(size)
        entry.stock -= quantity
        product.purchase_count = (product.purchase_count or 0) + quantity
    product.updated_at = datetime.utcnow()


def release_stock(product, size, quantity):
    """Give reserved units back, e.g. when an order is cancelled."""
    if product.sizes:
        entry = product.find_size(size)
        if entry is None:
            logger.warning('Cannot restock product %s: size %s no longer exists',
                           product.id, size)
            return
        entry.stock += quantity
        product.purchase_count = max(0, (product.purchase_count or 0) - quantity)
    product.updated_at = datetime.utcnow()
