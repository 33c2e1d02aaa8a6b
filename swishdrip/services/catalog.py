"""Catalog reads and admin product management."""

import logging

from swishdrip.extensions import db
from swishdrip.errors import NotFound, ValidationError
from swishdrip.models import Product, ProductSize
from swishdrip.utils.helpers import to_money, parse_quantity, normalize_size, pick

logger = logging.getLogger(__name__)

CATEGORIES = ('brand', 'thrift')
GENDERS = ('men', 'women', 'unisex', 'kids')
CONDITIONS = ('new', 'like_new', 'good', 'fair')


def get_product(product_id, include_inactive=False):
    """Load a product, treating soft-deleted products as missing."""
    product = db.session.get(Product, product_id)
    if product is None or (not product.is_active and not include_inactive):
        raise NotFound('Product not found')
    return product


def list_products(category=None, on_sale=False, page=1, per_page=12, include_inactive=False):
    """Paginated catalog listing, newest first."""
    query = Product.query
    if not include_inactive:
        query = query.filter_by(is_active=True)
    if category:
        query = query.filter_by(category=category)
    if on_sale:
        query = query.filter_by(sale=True)
    return query.order_by(Product.created_at.desc(), Product.id.desc()).paginate(
        page=page, per_page=per_page, error_out=False
    )


def parse_sizes(raw_sizes):
    """Validate a list of ``{size, stock}`` dicts."""
    if raw_sizes is None:
        return []
    if not isinstance(raw_sizes, list):
        raise ValidationError('sizes must be a list')

    parsed = []
    seen = set()
    for entry in raw_sizes:
        if not isinstance(entry, dict):
            raise ValidationError('Each size must be an object with size and stock')
        label = normalize_size(entry.get('size'))
        if label is None:
            raise ValidationError('Size label is required')
        if label in seen:
            raise ValidationError(f'Duplicate size {label}')
        seen.add(label)
        stock = parse_quantity(entry.get('stock', 0), field=f'stock for size {label}', minimum=0)
        parsed.append((label, stock))
    return parsed


def _set_sizes(product, sizes):
    existing = {s.size: s for s in product.sizes}
    ordered = []
    for position, (label, stock) in enumerate(sizes):
        entry = existing.get(label) or ProductSize(size=label)
        entry.stock = stock
        entry.position = position
        ordered.append(entry)
    product.sizes = ordered


def _choice(value, choices, field):
    if value not in choices:
        raise ValidationError(f'{field} must be one of: {", ".join(choices)}')
    return value


def _apply_fields(product, data, creating):
    name = pick(data, 'name')
    if name is not None or creating:
        if not name or not str(name).strip():
            raise ValidationError('Product name is required')
        product.name = str(name).strip()

    price = pick(data, 'price')
    if price is not None or creating:
        if price is None or price == '':
            raise ValidationError('Product price is required')
        product.price = to_money(price)

    category = pick(data, 'category')
    if category is not None or creating:
        product.category = _choice(category, CATEGORIES, 'category')

    clothing_type = pick(data, 'clothingType', 'clothing_type')
    if clothing_type is not None or creating:
        if not clothing_type or not str(clothing_type).strip():
            raise ValidationError('Clothing type is required')
        product.clothing_type = str(clothing_type).strip()

    if 'sale' in data:
        product.sale = bool(data['sale']) and data['sale'] != 'false'
    sale_price = pick(data, 'salePrice', 'sale_price')
    if sale_price is not None:
        product.sale_price = to_money(sale_price, field='salePrice')

    for key, attr in (('description', 'description'),
                      ('shortDescription', 'short_description'),
                      ('brand', 'brand'),
                      ('image', 'image')):
        value = pick(data, key, attr)
        if value is not None:
            setattr(product, attr, str(value))

    gender = pick(data, 'gender')
    if gender is not None:
        product.gender = _choice(gender, GENDERS, 'gender')
    condition = pick(data, 'condition')
    if condition is not None:
        product.condition = _choice(condition, CONDITIONS, 'condition')

    sku = pick(data, 'sku')
    if sku:
        product.sku = str(sku).strip()

    if 'sizes' in data:
        sizes = parse_sizes(data['sizes'])
        if product.sizes and not sizes:
            # Dropping every size turns it into an unsized product again
            product.in_stock = True
        _set_sizes(product, sizes)
    in_stock = pick(data, 'inStock', 'in_stock')
    if in_stock is not None and not product.sizes:
        product.in_stock = bool(in_stock)


def create_product(data):
    """Create a product from an admin payload."""
    product = Product(sale=False, sale_price=0, in_stock=True, is_active=True, purchase_count=0)
    _apply_fields(product, data, creating=True)
    db.session.add(product)
    db.session.commit()
    logger.info('Product created: %s (%s)', product.name, product.id)
    return product


def update_product(product_id, data):
    """Update the fields present in ``data``."""
    product = get_product(product_id, include_inactive=True)
    _apply_fields(product, data, creating=False)
    db.session.commit()
    logger.info('Product updated: %s (%s)', product.name, product.id)
    return product


def deactivate_product(product_id):
    """Soft delete; orders keep referencing the row."""
    product = get_product(product_id, include_inactive=True)
    product.is_active = False
    db.session.commit()
    logger.info('Product deactivated: %s (%s)', product.name, product.id)
    return product
