"""Seed script to populate database with sample data."""

from swishdrip import create_app, db
from swishdrip.models import User
from swishdrip.services import catalog


PRODUCTS = [
    {
        'name': 'Air Max 90', 'price': 140, 'category': 'brand', 'clothingType': 'shoes',
        'brand': 'Nike', 'description': 'Classic runner with visible Air cushioning',
        'sizes': [{'size': '40', 'stock': 4}, {'size': '41', 'stock': 6}, {'size': '42', 'stock': 2}],
    },
    {
        'name': 'Essentials Hoodie', 'price': 75, 'sale': True, 'salePrice': 59.99,
        'category': 'brand', 'clothingType': 'hoodie', 'brand': 'Fear of God',
        'description': 'Heavyweight fleece hoodie',
        'sizes': [{'size': 'S', 'stock': 5}, {'size': 'M', 'stock': 8}, {'size': 'L', 'stock': 0}],
    },
    {
        'name': 'Vintage Levi\'s 501', 'price': 45, 'category': 'thrift', 'clothingType': 'jeans',
        'brand': 'Levi\'s', 'condition': 'good', 'description': 'Faded 90s straight leg',
        'sizes': [{'size': 'W32 L32', 'stock': 1}],
    },
    {
        'name': 'Canvas Tote Bag', 'price': 20, 'category': 'thrift', 'clothingType': 'accessories',
        'condition': 'like_new', 'description': 'Heavy canvas tote', 'inStock': True,
    },
    {
        'name': 'Box Logo Tee', 'price': 60, 'sale': True, 'salePrice': 45,
        'category': 'brand', 'clothingType': 't-shirt', 'brand': 'Supreme',
        'description': 'Cotton tee with box logo',
        'sizes': [{'size': 'M', 'stock': 3}, {'size': 'L', 'stock': 2}],
    },
]


def seed_database():
    """Seed the database with sample data."""
    app = create_app()

    with app.app_context():
        # Create tables
        db.create_all()

        # Check if already seeded
        if User.query.filter_by(email='admin@swishdrip.com').first():
            print('Database already seeded!')
            return

        print('Seeding database...')

        admin = User(
            email='admin@swishdrip.com',
            name='Admin User',
            phone='9999999999',
            role='admin'
        )
        admin.set_password('admin123')
        db.session.add(admin)

        customer = User(
            email='john@swishdrip.com',
            name='John Doe',
            phone='9876543211',
            role='user'
        )
        customer.set_password('user123')
        db.session.add(customer)
        db.session.commit()

        for product_data in PRODUCTS:
            catalog.create_product(product_data)

        print('Database seeded successfully!')
        print('\nTest Accounts:')
        print('  Admin: admin@swishdrip.com / admin123')
        print('  Customer: john@swishdrip.com / user123')


if __name__ == '__main__':
    seed_database()
