"""
Error taxonomy shared by the core and the HTTP layer.

Every failure is scoped to the single action that raised it. Routes let these
propagate and ``register_error_handlers`` turns them into JSON responses.
"""
import logging

from flask import jsonify

logger = logging.getLogger(__name__)


class HandyOpsError(Exception):
    """Base class for all domain errors"""
    status_code = 400

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        data = {'error': self.message}
        if self.details:
            data['details'] = self.details
        return data


class ValidationError(HandyOpsError):
    """Bad input shape or value (blank note, oversized photo, non-positive rate)"""
    status_code = 400


class InvalidServiceError(ValidationError):
    """Service record cannot be priced (unknown pricing type or missing rate)"""


class EmptySelectionError(ValidationError):
    """Convert, print or email attempted with zero line items"""

    def __init__(self, message='Please select at least one service', details=None):
        super().__init__(message, details)


class NotFoundError(HandyOpsError):
    """Referenced job, service, client, note or photo id is absent"""
    status_code = 404


class BuilderBusyError(HandyOpsError):
    """An estimate action is already in flight"""
    status_code = 409


class BackendUnavailableError(HandyOpsError):
    """The record store could not be reached or refused the request"""
    status_code = 503


def register_error_handlers(app):
    """Render domain errors and rate-limit rejections as JSON."""

    @app.errorhandler(HandyOpsError)
    def handle_domain_error(err):
        if err.status_code >= 500:
            logger.error('%s: %s', type(err).__name__, err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(429)
    def ratelimit_handler(e):
        retry_after = dict(e.get_headers()).get('Retry-After') if hasattr(e, 'get_headers') else None
        return jsonify({
            'error': 'Too many requests. Please try again later.',
            'retry_after': int(retry_after) if retry_after else 60,
        }), 429

    @app.errorhandler(413)
    def too_large_handler(e):
        return jsonify({'error': 'Request body too large'}), 413
