"""Role-based access decorators."""

from functools import wraps
from flask_login import current_user

from swishdrip.errors import Forbidden
from swishdrip.extensions import login_manager


def admin_required(f):
    """Decorator to require admin role."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        if not current_user.is_admin():
            raise Forbidden('Access denied. Admin privileges required.')
        return f(*args, **kwargs)
    return decorated_function
