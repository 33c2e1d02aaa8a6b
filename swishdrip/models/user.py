"""User model and wishlist association."""

from datetime import datetime
from flask_login import UserMixin
from swishdrip.extensions import db, bcrypt


wishlist_items = db.Table(
    'wishlist_items',
    db.Column('user_id', db.Integer, db.ForeignKey('users.id'), primary_key=True),
    db.Column('product_id', db.Integer, db.ForeignKey('products.id'), primary_key=True),
    db.Column('created_at', db.DateTime, default=datetime.utcnow),
)


class User(UserMixin, db.Model):
    """Store customer or admin."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255))
    name = db.Column(db.String(100), default='')
    phone = db.Column(db.String(20), default='')
    role = db.Column(db.String(20), nullable=False, default='user')  # user, admin
    provider = db.Column(db.String(20), nullable=False, default='local')
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    cart_items = db.relationship('CartItem', backref='user', order_by='CartItem.id',
                                 cascade='all, delete-orphan')
    orders = db.relationship('Order', backref='customer', lazy='dynamic')
    wishlist = db.relationship('Product', secondary=wishlist_items, lazy='select',
                               order_by=wishlist_items.c.created_at)

    def set_password(self, password):
        """Hash and set the password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if password matches."""
        if not self.password_hash:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    def is_admin(self):
        """Check if user is admin."""
        return self.role == 'admin'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'role': self.role,
            'provider': self.provider,
        }

    def __repr__(self):
        return f'<User {self.email}>'
