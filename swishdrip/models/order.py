"""Order models."""

from datetime import datetime
import uuid
from swishdrip.extensions import db
from swishdrip.utils.helpers import money_to_float


class Order(db.Model):
    """Order model. Immutable after creation apart from its status."""
    __tablename__ = 'orders'

    STATUS_PENDING = 'pending'
    STATUS_DELIVERED = 'delivered'
    STATUS_CANCELLED = 'cancelled'
    STATUSES = (STATUS_PENDING, STATUS_DELIVERED, STATUS_CANCELLED)

    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # Customer contact
    customer_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    location = db.Column(db.String(500), nullable=False)

    # Pricing
    total = db.Column(db.Numeric(12, 2), nullable=False)

    # Status
    status = db.Column(db.String(20), default=STATUS_PENDING, nullable=False)
    cancellation_reason = db.Column(db.String(500))

    # Timestamps
    delivered_at = db.Column(db.DateTime)
    cancelled_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    items = db.relationship('OrderItem', backref='order', order_by='OrderItem.id',
                            cascade='all, delete-orphan')
    status_history = db.relationship('OrderStatusHistory', backref='order',
                                     order_by='OrderStatusHistory.id',
                                     cascade='all, delete-orphan')

    @staticmethod
    def generate_order_number():
        """Generate a unique order number."""
        timestamp = datetime.utcnow().strftime('%Y%m%d%H%M')
        unique_id = str(uuid.uuid4().hex)[:6].upper()
        return f'SD{timestamp}{unique_id}'

    def add_status_history(self, status, notes=None):
        """Add a status change to history."""
        self.status_history.append(OrderStatusHistory(status=status, notes=notes))

    def can_cancel(self):
        """Check if order can be cancelled."""
        return self.status == self.STATUS_PENDING

    def to_dict(self, include_history=False):
        data = {
            'id': self.id,
            'orderNumber': self.order_number,
            'userId': self.user_id,
            'customerName': self.customer_name,
            'phone': self.phone,
            'location': self.location,
            'items': [item.to_dict() for item in self.items],
            'total': money_to_float(self.total),
            'status': self.status,
            'cancellationReason': self.cancellation_reason,
            'deliveredAt': self.delivered_at.isoformat() if self.delivered_at else None,
            'cancelledAt': self.cancelled_at.isoformat() if self.cancelled_at else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if include_history:
            data['statusHistory'] = [h.to_dict() for h in self.status_history]
        return data

    def __repr__(self):
        return f'<Order {self.order_number}>'


class OrderItem(db.Model):
    """Order item model, a frozen copy of the product name and price."""
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    name = db.Column(db.String(150), nullable=False)  # Snapshot of product name
    size = db.Column(db.String(20))
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)  # Unit price at order time

    @property
    def subtotal(self):
        return self.price * self.quantity

    def to_dict(self):
        return {
            'productId': self.product_id,
            'name': self.name,
            'size': self.size,
            'quantity': self.quantity,
            'price': money_to_float(self.price),
        }

    def __repr__(self):
        return f'<OrderItem {self.name} x {self.quantity}>'


class OrderStatusHistory(db.Model):
    """Order status history model."""
    __tablename__ = 'order_status_history'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    status = db.Column(db.String(20), nullable=False)
    notes = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'status': self.status,
            'notes': self.notes,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<OrderStatusHistory {self.status}>'
