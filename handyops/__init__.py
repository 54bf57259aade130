import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

logger = logging.getLogger(__name__)


def _configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger('handyops').setLevel(level)


def _register_security_headers(app):
    from handyops.middleware import current_request_id

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers.setdefault('Content-Security-Policy', "default-src 'none'")
        if not app.debug and not app.testing:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        logger.debug('%s %s -> %s [%s]', request.method, request.path, response.status_code,
                     current_request_id(request.environ))
        return response


def create_app(config_name=None):
    """Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    from config import config
    app.config.from_object(config[config_name])
    _configure_logging(app)

    # Initialize extensions
    from handyops.extensions import limiter
    from handyops.middleware import RequestIdMiddleware
    from handyops.store import init_stores

    db.init_app(app)
    CORS(app, resources={rf"{app.config['API_PREFIX']}/*": {'origins': app.config['CORS_ORIGINS']}})
    limiter.init_app(app)
    app.wsgi_app = RequestIdMiddleware(app.wsgi_app)
    init_stores(app)

    # Register blueprints
    from handyops.routes import register_blueprints
    register_blueprints(app)

    from handyops.errors import register_error_handlers
    register_error_handlers(app)
    _register_security_headers(app)

    from handyops.cli import register_commands
    register_commands(app)

    # Health check endpoint
    @app.route(f"{app.config['API_PREFIX']}/health")
    @limiter.exempt
    def health():
        return jsonify({
            'status': 'healthy',
            'service': 'handyops-backend',
            'record_store': app.config['RECORD_STORE'],
        }), 200

    logger.info('HandyOps backend started with %s config', config_name)
    return app
