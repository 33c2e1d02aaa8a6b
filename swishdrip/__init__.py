"""Flask application factory."""

import logging
import os
from flask import Flask, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from .config import config
from .errors import StoreError, PersistenceFailure
from .extensions import db, migrate, login_manager, bcrypt, mail


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.url_map.strict_slashes = False

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    mail.init_app(app)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    # Bearer token authentication for Flask-Login
    from .models import User
    from .services.accounts import load_user_from_token

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(req):
        header = req.headers.get('Authorization', '')
        if header.startswith('Bearer '):
            return load_user_from_token(header.split(' ', 1)[1].strip())
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Authentication required'}), 401

    register_error_handlers(app)
    return app


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(level)
    logging.getLogger('swishdrip').setLevel(level)
    if not logging.getLogger().handlers and not app.testing:
        logging.basicConfig(format='%(asctime)s %(levelname)s [%(name)s] %(message)s')


def register_error_handlers(app):
    """Render every failure as ``{"success": false, "message": ...}``."""

    @app.errorhandler(StoreError)
    def store_error(error):
        db.session.rollback()
        if error.status_code >= 500:
            app.logger.error('%s %s failed: %s', request.method, request.path, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        app.logger.exception('Database error on %s %s', request.method, request.path)
        failure = PersistenceFailure('The store is temporarily unavailable, please try again')
        return jsonify(failure.to_dict()), failure.status_code

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({
            'success': False,
            'message': 'Route not found',
            'requested': request.path
        }), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Internal server error'}), 500
