"""
Pytest configuration and fixtures for the ATS portal tests.

Every API call is answered by requests_mock; nothing reaches the network.
"""
import pytest
from django.conf import settings as django_settings
from django.test import RequestFactory

from factories import API_BASE_URL, UserPayloadFactory


@pytest.fixture(autouse=True)
def portal_settings(settings):
    """Point the API client at the mocked base URL and relax production guards."""
    settings.ATS_API_BASE_URL = API_BASE_URL
    settings.ATS_API_TOKEN = ''
    settings.SECURE_SSL_REDIRECT = False
    settings.RATELIMIT_ENABLE = False
    settings.PUBLIC_SITE_URL = 'https://careers.whlc.test'
    settings.DEFAULT_PAGE_SIZE = 25
    return settings


@pytest.fixture
def api_url():
    """Build a full mocked API URL for an endpoint."""
    def _url(endpoint):
        return f"{API_BASE_URL}/{endpoint.lstrip('/')}"
    return _url


@pytest.fixture
def rf():
    return RequestFactory()


@pytest.fixture
def sign_in(client, requests_mock):
    """
    Store an API token in the session and answer ``/auth/me``.

    Returns a callable taking the user payload overrides.
    """
    def _sign_in(**overrides):
        user = UserPayloadFactory(**overrides)
        session = client.session
        session[django_settings.ATS_TOKEN_SESSION_KEY] = 'test-token'
        session.save()
        client.cookies[django_settings.SESSION_COOKIE_NAME] = session.session_key
        requests_mock.get(f'{API_BASE_URL}/auth/me', json={'user': user})
        return user
    return _sign_in


@pytest.fixture
def admin_user(sign_in):
    return sign_in(role='admin')


@pytest.fixture
def manager_user(sign_in):
    return sign_in(role='hiring_manager')


@pytest.fixture
def reviewer_user(sign_in):
    return sign_in(role='reviewer')
