"""Product and size variant models."""

import random
from datetime import datetime
from sqlalchemy import event
from sqlalchemy.orm import Session
from swishdrip.extensions import db
from swishdrip.utils.helpers import money_to_float


class Product(db.Model):
    """Catalog product with optional per-size stock."""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, default='')
    short_description = db.Column(db.String(150), default='')

    # Pricing
    price = db.Column(db.Numeric(10, 2), nullable=False)
    sale = db.Column(db.Boolean, default=False, nullable=False)
    sale_price = db.Column(db.Numeric(10, 2), default=0)

    # Categorization
    category = db.Column(db.String(20), nullable=False, default='brand')  # brand, thrift
    clothing_type = db.Column(db.String(50), nullable=False, default='')
    brand = db.Column(db.String(100), default='')
    gender = db.Column(db.String(20), default='unisex')  # men, women, unisex, kids
    condition = db.Column(db.String(20), default='new')  # new, like_new, good, fair

    # Inventory
    in_stock = db.Column(db.Boolean, default=True, nullable=False)
    sku = db.Column(db.String(50), unique=True)
    image = db.Column(db.String(255), default='')

    # Admin & tracking
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    purchase_count = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    sizes = db.relationship('ProductSize', backref='product', order_by='ProductSize.position',
                            cascade='all, delete-orphan')
    cart_items = db.relationship('CartItem', backref='product', lazy='dynamic')
    order_items = db.relationship('OrderItem', backref='product', lazy='dynamic')

    @property
    def current_price(self):
        """Get the current effective price."""
        if self.sale:
            return self.sale_price or 0
        return self.price

    @property
    def total_stock(self):
        """Sum of size stock, or 1/0 from the in-stock flag for unsized products."""
        if not self.sizes:
            return 1 if self.in_stock else 0
        return sum(s.stock or 0 for s in self.sizes)

    def find_size(self, label):
        """Return the size variant matching ``label``, if any."""
        for size in self.sizes:
            if size.size == label:
                return size
        return None

    def is_size_in_stock(self, label):
        """Check if a specific size is in stock."""
        if not self.sizes:
            return self.in_stock
        size = self.find_size(label)
        return size is not None and size.stock > 0

    def sync_stock_flag(self):
        """Re-derive ``in_stock`` from the size list."""
        if self.sizes:
            self.in_stock = any((s.stock or 0) > 0 for s in self.sizes)

    def generate_sku(self):
        """Generate a SKU like BR-123456-54321."""
        prefix = 'BR' if self.category == 'brand' else 'TH'
        stamp = datetime.utcnow().strftime('%H%M%S')
        self.sku = f'{prefix}-{stamp}-{random.randint(10000, 99999)}'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'shortDescription': self.short_description,
            'price': money_to_float(self.price),
            'sale': self.sale,
            'salePrice': money_to_float(self.sale_price),
            'currentPrice': money_to_float(self.current_price),
            'category': self.category,
            'clothingType': self.clothing_type,
            'brand': self.brand,
            'gender': self.gender,
            'condition': self.condition,
            'inStock': self.in_stock,
            'totalStock': self.total_stock,
            'sizes': [s.to_dict() for s in self.sizes],
            'sku': self.sku,
            'image': self.image,
            'isActive': self.is_active,
            'purchaseCount': self.purchase_count,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Product {self.name}>'


class ProductSize(db.Model):
    """One (size label, stock count) pair of a product."""
    __tablename__ = 'product_sizes'
    __table_args__ = (
        db.UniqueConstraint('product_id', 'size', name='uq_product_sizes_product_size'),
        db.CheckConstraint('stock >= 0', name='ck_product_sizes_stock_positive'),
    )

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False, index=True)
    size = db.Column(db.String(20), nullable=False)
    stock = db.Column(db.Integer, default=0, nullable=False)
    position = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {'size': self.size, 'stock': self.stock}

    def __repr__(self):
        return f'<ProductSize {self.size}: {self.stock}>'


@event.listens_for(Session, 'before_flush')
def _refresh_product_inventory(session, flush_context, instances):
    """Every product save re-derives ``in_stock`` and fills an empty SKU."""
    products = set()
    with session.no_autoflush:
        for obj in list(session.new) + list(session.dirty):
            if isinstance(obj, Product):
                products.add(obj)
            elif isinstance(obj, ProductSize) and obj.product is not None:
                products.add(obj.product)
        for product in products:
            product.sync_stock_flag()
            if not product.sku:
                product.generate_sku()
