"""Local accounts and bearer tokens."""

import logging

from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from swishdrip.extensions import db
from swishdrip.errors import ValidationError, AuthenticationFailed
from swishdrip.models import User

logger = logging.getLogger(__name__)

TOKEN_SALT = 'auth-token'


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def issue_token(user):
    """Sign a token identifying ``user``."""
    return _serializer().dumps({'id': user.id, 'role': user.role})


def load_user_from_token(token):
    """Return the active user for a token, or None if invalid or expired."""
    try:
        data = _serializer().loads(token, max_age=current_app.config['TOKEN_MAX_AGE'])
    except SignatureExpired:
        logger.debug('Rejected expired token')
        return None
    except BadSignature:
        logger.debug('Rejected invalid token')
        return None
    user = db.session.get(User, data.get('id'))
    if user is None or not user.is_active:
        return None
    return user


def register_user(email, password, name='', phone='', role='user'):
    email = (email or '').strip().lower()
    if User.query.filter_by(email=email).first():
        raise ValidationError('Email already registered')

    user = User(email=email, name=name or email.split('@')[0], phone=phone or '',
                role=role, provider='local')
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info('Registered %s user %s', role, email)
    return user


def authenticate(email, password):
    """Check credentials, returning the user or raising AuthenticationFailed."""
    user = User.query.filter_by(email=(email or '').strip().lower()).first()
    if not user or not user.check_password(password):
        raise AuthenticationFailed('Invalid credentials')
    if not user.is_active:
        raise AuthenticationFailed('Your account has been deactivated. Please contact support.')
    return user


def update_profile(user, name=None, phone=None):
    if name is not None:
        user.name = name.strip()
    if phone is not None:
        user.phone = phone.strip()
    db.session.commit()
    return user


def change_password(user, current_password, new_password):
    """Replace the password after checking the current one."""
    if not user.check_password(current_password):
        raise AuthenticationFailed('Current password is incorrect')
    user.set_password(new_password)
    db.session.commit()
    logger.info('User %s changed their password', user.email)
    return user


def deactivate_account(user):
    """Soft delete: the account can no longer log in or use its tokens."""
    user.is_active = False
    db.session.commit()
    logger.info('User %s deactivated their account', user.email)
    return user


def create_admin(email, password, name='Admin User', phone=''):
    """Create an admin, or promote an existing account to admin."""
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user:
        user.role = 'admin'
        db.session.commit()
        return user, False
    return register_user(email, password, name=name, phone=phone, role='admin'), True
