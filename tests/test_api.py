"""
Tests for the ATS API client.
"""
from unittest.mock import patch

import pytest
import requests
from django.core.files.uploadedfile import SimpleUploadedFile
from django.http import HttpResponse

from core.api import ApiClient, ApiError, ApiUnavailableError
from core.middleware import ApiUserMiddleware
from factories import API_BASE_URL


@pytest.fixture
def client_with_token():
    return ApiClient(API_BASE_URL, token='secret')


class TestApiClientRequests:
    """Tests for JSON requests."""

    def test_get_sends_bearer_token_and_params(self, client_with_token, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/jobs', json=[{'id': 'job-1'}])

        result = client_with_token.get('/jobs', params={'status': 'open'})

        assert result == [{'id': 'job-1'}]
        sent = requests_mock.last_request
        assert sent.headers['Authorization'] == 'Bearer secret'
        assert sent.headers['User-Agent'] == 'ats-portal/1.0'
        assert sent.qs == {'status': ['open']}

    def test_no_authorization_header_without_token(self, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/jobs/public', json=[])

        ApiClient(API_BASE_URL).get('/jobs/public')

        assert 'Authorization' not in requests_mock.last_request.headers

    def test_post_sends_json_body(self, client_with_token, requests_mock):
        requests_mock.post(f'{API_BASE_URL}/jobs', json={'id': 'job-9'}, status_code=201)

        result = client_with_token.post('/jobs', {'title': 'Designer'})

        assert result == {'id': 'job-9'}
        assert requests_mock.last_request.json() == {'title': 'Designer'}
        assert requests_mock.last_request.headers['Content-Type'] == 'application/json'

    def test_error_message_comes_from_body(self, client_with_token, requests_mock):
        requests_mock.patch(
            f'{API_BASE_URL}/applicants/a1/stage',
            json={'error': 'Invalid stage transition'}, status_code=422,
        )

        with pytest.raises(ApiError) as exc_info:
            client_with_token.patch('/applicants/a1/stage', {'stage': 'hired'})

        assert exc_info.value.message == 'Invalid stage transition'
        assert exc_info.value.status_code == 422
        assert exc_info.value.payload == {'error': 'Invalid stage transition'}

    def test_error_without_body_uses_fallback(self, client_with_token, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/jobs/missing', text='Not Found', status_code=404)

        with pytest.raises(ApiError) as exc_info:
            client_with_token.get('/jobs/missing')

        assert exc_info.value.message == 'Request failed'
        assert exc_info.value.is_not_found

    def test_forbidden_statuses(self):
        assert ApiError('x', 401).is_forbidden
        assert ApiError('x', 403).is_forbidden
        assert not ApiError('x', 500).is_forbidden

    def test_empty_body_returns_none(self, client_with_token, requests_mock):
        requests_mock.delete(f'{API_BASE_URL}/offices/o1', status_code=204)

        assert client_with_token.delete('/offices/o1') is None

    def test_connection_error_raises_unavailable(self, client_with_token, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/jobs', exc=requests.ConnectionError)

        with pytest.raises(ApiUnavailableError):
            client_with_token.get('/jobs')


class TestApiClientUpload:
    """Tests for multipart uploads."""

    def test_upload_drops_empty_fields(self, client_with_token, requests_mock):
        requests_mock.post(f'{API_BASE_URL}/applicants', json={'id': 'a1'}, status_code=201)
        resume = SimpleUploadedFile('resume.pdf', b'%PDF-1.4', content_type='application/pdf')

        client_with_token.upload(
            '/applicants', {'firstName': 'Ada', 'phone': '', 'website': None}, {'resume': resume},
        )

        sent = requests_mock.last_request
        assert sent.headers['Content-Type'].startswith('multipart/form-data')
        body = sent.body.decode('latin-1')
        assert 'name="firstName"' in body
        assert 'name="phone"' not in body
        assert 'filename="resume.pdf"' in body

    def test_upload_error_fallback_message(self, client_with_token, requests_mock):
        requests_mock.post(f'{API_BASE_URL}/applicants', status_code=500)

        with pytest.raises(ApiError) as exc_info:
            client_with_token.upload('/applicants', {'firstName': 'Ada'})

        assert exc_info.value.message == 'Upload failed'

    def test_upload_rejects_get(self, client_with_token):
        with pytest.raises(ValueError):
            client_with_token.upload('/applicants', {}, method='GET')


class TestForRequest:
    """Tests for building a client from the incoming request."""

    def test_token_from_session(self, rf, settings):
        request = rf.get('/')
        request.session = {settings.ATS_TOKEN_SESSION_KEY: 'session-token'}

        client = ApiClient.for_request(request)

        assert client.token == 'session-token'
        assert client.base_url == API_BASE_URL

    def test_falls_back_to_service_token(self, rf, settings):
        settings.ATS_API_TOKEN = 'service-token'
        request = rf.get('/')
        request.session = {}

        assert ApiClient.for_request(request).token == 'service-token'

    def test_no_token(self, rf):
        request = rf.get('/')
        request.session = {}

        assert ApiClient.for_request(request).token is None


class TestSessionLifecycle:
    """Tests for releasing pooled connections."""

    def test_close_releases_session(self, client_with_token, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/jobs', json=[])
        client_with_token.get('/jobs')
        session = client_with_token.session

        with patch.object(session, 'close') as close:
            client_with_token.close()

        close.assert_called_once_with()
        assert client_with_token._session is None

    def test_close_without_session_is_a_no_op(self, client_with_token):
        client_with_token.close()

        assert client_with_token._session is None

    def test_context_manager_closes(self, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/jobs', json=[])

        with ApiClient(API_BASE_URL) as api:
            api.get('/jobs')
            assert api._session is not None

        assert api._session is None

    def test_middleware_closes_client_after_response(self, rf):
        middleware = ApiUserMiddleware(lambda request: HttpResponse())
        request = rf.get('/')
        request.session = {}
        middleware.process_request(request)
        session = request.api.session

        with patch.object(session, 'close') as close:
            middleware.process_response(request, HttpResponse())

        close.assert_called_once_with()
        assert request.api._session is None
