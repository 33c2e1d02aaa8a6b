#!/usr/bin/env python3
"""
Script to create an admin user for Swish Drip.
Uses DATABASE_URL / FLASK_CONFIG from the environment or .env file.
"""

from swishdrip import create_app
from swishdrip.services.accounts import create_admin


def create_admin_user(email, password, name, phone=''):
    """
    Create an admin user, or promote an existing account.

    Args:
        email: Admin email address
        password: Admin password (will be hashed)
        name: Admin full name
        phone: Admin phone number (optional)
    """
    app = create_app()
    with app.app_context():
        user, created = create_admin(email, password, name=name, phone=phone)
        if created:
            print(f"✅ Admin user created successfully!")
            print(f"   Email: {user.email}")
            print(f"   Name: {user.name}")
        else:
            print(f"✅ User {user.email} already existed and was updated to admin role!")


def main():
    print("=" * 60)
    print("Swish Drip - Admin User Creation")
    print("=" * 60)
    print()

    print("Enter admin user details:")
    email = input("Email: ").strip().lower()
    password = input("Password: ").strip()
    name = input("Full Name: ").strip()
    phone = input("Phone (optional): ").strip()

    print()
    print("Creating admin user with:")
    print(f"  Email: {email}")
    print(f"  Name: {name}")
    print(f"  Phone: {phone if phone else 'Not provided'}")
    print()

    confirm = input("Proceed? (yes/no): ").lower()
    if confirm == 'yes':
        create_admin_user(email, password, name, phone)
    else:
        print("❌ Admin creation cancelled.")


if __name__ == '__main__':
    main()
