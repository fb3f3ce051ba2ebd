from flask import Flask
from flask_cors import CORS
from app.extensions import db, redis_client, socketio
from app.config import config
from app.utils.logger import configure_app_logging, RequestLogger


def create_app(config_name='development'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    # Initialize extensions
    db.init_app(app)
    redis_client.init_app(app)
    socketio.init_app(app, cors_allowed_origins="*")
    CORS(app)

    configure_app_logging(app)
    RequestLogger(app)

    # Register blueprints
    from app.api import register_blueprints
    register_blueprints(app)

    # Socket.IO handlers
    from app.websockets import events  # noqa: F401

    # Error handlers
    register_error_handlers(app)

    return app


def register_error_handlers(app):
    """Register error handlers"""
    from flask import jsonify
    from app.errors import AppError

    @app.errorhandler(AppError)
    def app_error(error):
        return jsonify({'success': False, 'error': error.error, 'message': error.message}), error.status_code

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({'success': False, 'error': 'Bad request', 'message': str(error)}), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'error': 'Not found', 'message': str(error)}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'error': 'Method not allowed', 'message': str(error)}), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({'success': False, 'error': 'Internal server error', 'message': str(error)}), 500
