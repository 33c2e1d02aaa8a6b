"""Shared fixtures.

Route tests must not run inside a pushed app context: Flask-Login caches the
current user on ``g``, which lives on the app context, so every client request
gets its own context. Data factories therefore push a short-lived context
themselves and return ids.
"""

import pytest

from swishdrip import create_app
from swishdrip.extensions import db
from swishdrip.models import User
from swishdrip.services import catalog
from swishdrip.services.accounts import issue_token


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """App context for calling services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


def _create_user(app, email, role='user', password='secret123'):
    with app.app_context():
        user = User(email=email, name=email.split('@')[0], phone='5551234567', role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.id, issue_token(user)


@pytest.fixture
def shopper(app):
    """(user id, bearer headers) of a regular customer."""
    user_id, token = _create_user(app, 'shopper@swishdrip.com')
    return user_id, {'Authorization': f'Bearer {token}'}


@pytest.fixture
def other_shopper(app):
    user_id, token = _create_user(app, 'other@swishdrip.com')
    return user_id, {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin(app):
    user_id, token = _create_user(app, 'admin@swishdrip.com', role='admin')
    return user_id, {'Authorization': f'Bearer {token}'}


@pytest.fixture
def make_product(app):
    """Create a product and return its id."""
    def factory(name='Box Logo Tee', price=100, sizes=None, **fields):
        data = {'name': name, 'price': price, 'category': 'brand', 'clothingType': 't-shirt'}
        if sizes is not None:
            data['sizes'] = [{'size': label, 'stock': stock} for label, stock in sizes]
        data.update(fields)
        with app.app_context():
            return catalog.create_product(data).id
    return factory
