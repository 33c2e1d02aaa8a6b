"""Cart model."""

from datetime import datetime
from swishdrip.extensions import db
from swishdrip.utils.helpers import money_to_float


class CartItem(db.Model):
    """Shopping cart line, unique per (user, product, size)."""
    __tablename__ = 'cart_items'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'product_id', 'size', name='uq_cart_items_user_product_size'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    size = db.Column(db.String(20))
    quantity = db.Column(db.Integer, default=1, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=0)  # Snapshot at add time
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def subtotal(self):
        """Subtotal at the live product price, for display."""
        if self.product:
            return self.product.current_price * self.quantity
        return 0

    def matches(self, product_id, size):
        return self.product_id == product_id and (self.size or None) == (size or None)

    def to_dict(self):
        return {
            'productId': self.product_id,
            'size': self.size,
            'quantity': self.quantity,
            'price': money_to_float(self.price),
            'subtotal': money_to_float(self.subtotal),
            'product': self.product.to_dict() if self.product else None,
        }

    def __repr__(self):
        return f'<CartItem {self.product_id} x {self.quantity}>'
