"""
Tests for events, fair intake and scan prefill.
"""
import pytest
from django.urls import reverse

from factories import API_BASE_URL, EventPayloadFactory, JobPayloadFactory


def api(endpoint):
    return f'{API_BASE_URL}{endpoint}'


INTAKE = {
    'first_name': 'Ada', 'last_name': 'Lovelace', 'email': 'ada@lsu.edu', 'rating': '5', 'job': 'job-1',
}


@pytest.fixture
def event_api(requests_mock):
    requests_mock.get(api('/events/e1'), json=EventPayloadFactory(id='e1', name='LSU Spring Fair'))
    requests_mock.get(api('/jobs'), json=[JobPayloadFactory(id='job-1')])
    requests_mock.get(api('/applicants'), json=[])
    return requests_mock


class TestEventAccess:

    def test_reviewer_sees_events(self, client, reviewer_user, requests_mock):
        requests_mock.get(api('/events'), json=[EventPayloadFactory(name='Tulane Career Day')])

        response = client.get(reverse('events:event_list'))

        assert response.status_code == 200
        assert 'Tulane Career Day' in response.content.decode()

    def test_manager_without_event_access_is_denied(self, client, sign_in):
        sign_in(role='hiring_manager', eventAccess=False)

        assert client.get(reverse('events:event_list')).status_code == 403

    def test_reviewer_cannot_create_events(self, client, reviewer_user):
        assert client.get(reverse('events:event_create')).status_code == 403

    def test_detail_lists_event_applicants(self, client, reviewer_user, event_api):
        response = client.get(reverse('events:event_detail', args=['e1']))

        assert response.status_code == 200
        applicant_request = [r for r in event_api.request_history if r.path == '/api/applicants'][0]
        assert applicant_request.qs['eventid'] == ['e1']


class TestFairIntake:

    def test_add_another_keeps_job_and_counts(self, client, reviewer_user, event_api):
        event_api.post(api('/events/e1/intake'), json={'id': 'a9'}, status_code=201)

        response = client.post(reverse('events:fair_intake', args=['e1']), dict(INTAKE, action='another'))

        assert response.status_code == 302
        assert response['Location'] == reverse('events:event_detail', args=['e1']) + '?job=job-1#intake'
        assert 'source=LSU+Spring+Fair' in event_api.last_request.text
        assert client.session['intake_count_e1'] == 1

        page = client.get(response['Location'])
        content = page.content.decode()
        assert 'Ada Lovelace added successfully' in content
        assert page.context['intake_form'].initial['job'] == 'job-1'

    def test_missing_fields_rerender_the_page(self, client, reviewer_user, event_api):
        response = client.post(reverse('events:fair_intake', args=['e1']), {'first_name': 'Ada'})

        assert response.status_code == 200
        assert 'First name, last name, email, and rating are required' in response.content.decode()
        assert not any(r.method == 'POST' for r in event_api.request_history)

    def test_api_failure_is_reported(self, client, reviewer_user, event_api):
        event_api.post(api('/events/e1/intake'), json={'error': 'Event is closed'}, status_code=400)

        response = client.post(reverse('events:fair_intake', args=['e1']), INTAKE)

        assert response.status_code == 200
        assert 'Event is closed' in response.content.decode()


class TestIntakeHelpers:

    def test_duplicate_check(self, client, reviewer_user, requests_mock):
        requests_mock.post(api('/applicants/check-duplicates'), json=[{'id': 'a1', 'job': {'title': 'Designer'}}])

        data = client.post(reverse('events:check_duplicates'), {'email': 'ada@lsu.edu'}).json()

        assert data['duplicates'][0]['id'] == 'a1'
        assert requests_mock.last_request.json() == {'email': 'ada@lsu.edu'}

    def test_duplicate_check_skips_invalid_email(self, client, reviewer_user, requests_mock):
        data = client.post(reverse('events:check_duplicates'), {'email': 'ada@'}).json()

        assert data == {'duplicates': []}
        assert requests_mock.call_count == 1

    def test_scan_prefill(self, client, reviewer_user):
        raw = 'BEGIN:VCARD\nN:Lovelace;Ada\nEMAIL:ada@lsu.edu\nEND:VCARD'

        data = client.post(reverse('events:scan_prefill'), {'raw': raw}).json()

        assert data['first_name'] == 'Ada'
        assert data['email'] == 'ada@lsu.edu'

    def test_empty_scan(self, client, reviewer_user):
        assert client.post(reverse('events:scan_prefill'), {'raw': ''}).status_code == 400
