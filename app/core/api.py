"""
REST client for the ATS API.

Every page in the portal reads and writes through this client; nothing is
stored locally.
"""
import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the ATS API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_forbidden(self) -> bool:
        return self.status_code in (401, 403)


class ApiUnavailableError(ApiError):
    """Raised when the ATS API cannot be reached at all."""
    pass


class ApiClient:
    """
    Thin JSON client mirroring the HTTP verbs the pages use.

    Each call returns the decoded JSON body. Errors are raised as ApiError
    carrying the API's own ``error`` message when it sends one.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: int = 15):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self._session = None

    @classmethod
    def for_request(cls, request) -> 'ApiClient':
        """Build a client for the incoming request's API token."""
        token = None
        if hasattr(request, 'session'):
            token = request.session.get(settings.ATS_TOKEN_SESSION_KEY)
        return cls(
            settings.ATS_API_BASE_URL,
            token=token or settings.ATS_API_TOKEN or None,
            timeout=settings.ATS_API_TIMEOUT,
        )

    @property
    def session(self) -> requests.Session:
        """Get or create requests session with default configuration."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                'User-Agent': 'ats-portal/1.0',
                'Accept': 'application/json',
            })
        return self._session

    def close(self) -> None:
        """Release the pooled connections, if a session was opened."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> 'ApiClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_headers(self, json_body: bool = True) -> Dict[str, str]:
        headers = {}
        if json_body:
            headers['Content-Type'] = 'application/json'
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a JSON request and return the decoded response body."""
        try:
            response = self.session.request(
                method=method,
                url=self.url(endpoint),
                json=data,
                params=params,
                headers=self.get_headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"API request failed: {method} {endpoint}: {e}")
            raise ApiUnavailableError(f"Request failed: {e}")

        return self._handle_response(method, endpoint, response, 'Request failed')

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('GET', endpoint, params=params)

    def post(self, endpoint: str, data: Any = None) -> Any:
        return self.request('POST', endpoint, data=data)

    def put(self, endpoint: str, data: Any = None) -> Any:
        return self.request('PUT', endpoint, data=data)

    def patch(self, endpoint: str, data: Any = None) -> Any:
        return self.request('PATCH', endpoint, data=data)

    def delete(self, endpoint: str) -> Any:
        return self.request('DELETE', endpoint)

    def upload(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        method: str = 'POST',
    ) -> Any:
        """
        Send a multipart form.

        Args:
            endpoint: API endpoint (without base URL)
            data: Plain form fields; empty values are left out
            files: Mapping of field name to an uploaded file
            method: POST, PUT or PATCH

        Returns:
            Decoded JSON body
        """
        if method not in ('POST', 'PUT', 'PATCH'):
            raise ValueError(f"Unsupported upload method: {method}")

        fields = {key: value for key, value in (data or {}).items() if value not in (None, '')}
        parts = {}
        for name, uploaded in (files or {}).items():
            if uploaded:
                parts[name] = (
                    getattr(uploaded, 'name', name),
                    uploaded,
                    getattr(uploaded, 'content_type', None) or 'application/octet-stream',
                )

        try:
            response = self.session.request(
                method=method,
                url=self.url(endpoint),
                data=fields,
                files=parts or None,
                headers=self.get_headers(json_body=False),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"API upload failed: {method} {endpoint}: {e}")
            raise ApiUnavailableError(f"Upload failed: {e}")

        return self._handle_response(method, endpoint, response, 'Upload failed')

    def _handle_response(self, method: str, endpoint: str, response, fallback: str) -> Any:
        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = fallback
            if isinstance(body, dict) and body.get('error'):
                message = body['error']
            logger.warning(f"API {method} {endpoint} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=body)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise ApiError(fallback, status_code=response.status_code)
