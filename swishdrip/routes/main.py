"""Service info and health routes."""

from datetime import datetime
from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from swishdrip.extensions import db

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """API landing."""
    return jsonify({
        'message': 'Swish Drip Store Backend',
        'version': '1.0.0',
        'endpoints': {
            'health': '/health',
            'products': '/api/products',
            'cart': '/api/cart',
            'orders': '/api/orders',
            'wishlist': '/api/wishlist',
            'auth': '/api/auth',
        }
    })


@main_bp.route('/health')
def health():
    """Liveness check including a database round trip."""
    database = 'connected'
    status_code = 200
    try:
        db.session.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        current_app.logger.error('Health check database error: %s', e)
        db.session.rollback()
        database = 'unavailable'
        status_code = 503
    return jsonify({
        'status': 'healthy' if status_code == 200 else 'degraded',
        'database': database,
        'timestamp': datetime.utcnow().isoformat(),
    }), status_code
