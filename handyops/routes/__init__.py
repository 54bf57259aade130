"""
HandyOps API route blueprints
"""
from .calendar import calendar_bp
from .clients import clients_bp
from .estimates import estimates_bp
from .jobs import jobs_bp
from .reports import reports_bp
from .reviews import reviews_bp
from .services import services_bp
from .uploads import uploads_bp


def register_blueprints(app):
    api_prefix = app.config['API_PREFIX']
    app.register_blueprint(services_bp, url_prefix=f'{api_prefix}/services')
    app.register_blueprint(jobs_bp, url_prefix=f'{api_prefix}/jobs')
    app.register_blueprint(estimates_bp, url_prefix=f'{api_prefix}/estimates')
    app.register_blueprint(calendar_bp, url_prefix=f'{api_prefix}/calendar')
    app.register_blueprint(clients_bp, url_prefix=f'{api_prefix}/clients')
    app.register_blueprint(reviews_bp, url_prefix=f'{api_prefix}/reviews')
    app.register_blueprint(uploads_bp, url_prefix=f'{api_prefix}/uploads')
    app.register_blueprint(reports_bp, url_prefix=api_prefix)


__all__ = [
    'calendar_bp',
    'clients_bp',
    'estimates_bp',
    'jobs_bp',
    'reports_bp',
    'reviews_bp',
    'services_bp',
    'uploads_bp',
    'register_blueprints',
]
