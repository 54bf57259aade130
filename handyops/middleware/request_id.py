"""
Request ID middleware for request tracing and logging
"""
from handyops.utils.helpers import generate_unique_id


class RequestIdMiddleware:
    """
    WSGI middleware that tags every request with an id

    An incoming ``X-Request-ID`` header is reused, otherwise a new id is
    generated. The id is stored in the WSGI environ and echoed back in the
    response headers.
    """

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        request_id = environ.get('HTTP_X_REQUEST_ID') or generate_unique_id()
        environ['request_id'] = request_id

        def start_response_with_id(status, headers, exc_info=None):
            headers.append(('X-Request-ID', request_id))
            return start_response(status, headers, exc_info)

        return self.app(environ, start_response_with_id)


def current_request_id(environ):
    """Request id assigned by ``RequestIdMiddleware``, or '-' outside a request"""
    return environ.get('request_id', '-')
