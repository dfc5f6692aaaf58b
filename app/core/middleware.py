"""
Custom middleware for the applicant-tracking portal.
"""
import logging
import time
from typing import Optional

from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin

from .api import ApiClient, ApiError
from .roles import PortalUser
from .utils import get_client_ip

request_logger = logging.getLogger('core.requests')
logger = logging.getLogger(__name__)


def get_portal_user(request: HttpRequest) -> Optional[PortalUser]:
    """Resolve the signed-in user from the API, once per request."""
    if not hasattr(request, '_cached_portal_user'):
        user = None
        client = request.api
        if client.token:
            try:
                payload = client.get('/auth/me')
            except ApiError as e:
                logger.info(f"Could not resolve current user: {e.message}")
            else:
                if isinstance(payload, dict):
                    user = PortalUser.from_payload(payload.get('user', payload))
        request._cached_portal_user = user
    return request._cached_portal_user


class ApiUserMiddleware(MiddlewareMixin):
    """
    Attach an API client for the session token to every request.

    The session token is issued by the external sign-in service; this
    middleware only reads it.
    """

    def process_request(self, request: HttpRequest) -> None:
        request.api = ApiClient.for_request(request)

    def process_response(self, request: HttpRequest, response: HttpResponse) -> HttpResponse:
        client = getattr(request, 'api', None)
        if client is not None:
            client.close()
        return response


class RequestLogMiddleware(MiddlewareMixin):
    """
    Log one line per request with method, path, status and duration.
    """

    SKIP_PATHS = ['/health/', '/static/', '/favicon.ico']

    def process_request(self, request: HttpRequest) -> None:
        request._log_started = time.monotonic()

    def process_response(self, request: HttpRequest, response: HttpResponse) -> HttpResponse:
        if any(request.path.startswith(path) for path in self.SKIP_PATHS):
            return response

        started = getattr(request, '_log_started', None)
        duration_ms = round((time.monotonic() - started) * 1000, 1) if started else None
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        request_logger.log(
            level,
            f'{request.method} {request.path} {response.status_code}',
            extra={
                'method': request.method,
                'path': request.path,
                'status_code': response.status_code,
                'duration_ms': duration_ms,
                'remote_addr': get_client_ip(request),
            },
        )
        return response

