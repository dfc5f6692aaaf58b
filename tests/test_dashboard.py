"""
Tests for the dashboard, source analytics and notifications.
"""
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from dashboard.analytics import source_cards
from dashboard.notifications import DEFAULT_ICON, decorate, safe_link
from factories import API_BASE_URL, ApplicantPayloadFactory, EventPayloadFactory


class TestSourceCards:

    def test_sources_are_summed_per_platform(self):
        cards = source_cards({
            'LinkedIn': {'total': 10, 'hired': 1, 'rejected': 3},
            'linkedin jobs': {'total': 5, 'hired': 1, 'rejected': 0},
            'Handshake': {'total': 4, 'hired': 0, 'rejected': 1},
        })

        by_id = {card.platform.id: card for card in cards}
        assert by_id['linkedin'].total == 15
        assert by_id['linkedin'].hired == 2
        assert by_id['linkedin'].conversion_rate == '13.3'
        assert by_id['handshake'].conversion_rate == '0.0'

    def test_every_known_platform_has_a_card(self):
        cards = source_cards({})

        assert [card.platform.id for card in cards] == [
            'website', 'linkedin', 'handshake', 'aiala', 'aiabr', 'direct', 'referral',
        ]
        assert all(card.total == 0 for card in cards)

    def test_unknown_sources_follow_known_platforms(self):
        cards = source_cards({'Indeed': {'total': 2, 'hired': 1}, 'Glassdoor': {'total': 1}})

        assert [card.platform.name for card in cards[-2:]] == ['Indeed', 'Glassdoor']
        assert cards[-2].conversion_rate == '50.0'
        assert cards[-2].card_classes == 'bg-gray-50 border-gray-200'


class TestNotificationHelpers:

    def test_decorate(self):
        created = (timezone.now() - timedelta(minutes=5)).isoformat()

        notification = decorate({'type': 'interview_scheduled', 'createdAt': created})

        assert notification['icon'] == '\U0001F4C5'
        assert notification['time_ago'] == '5m ago'

    def test_unknown_type_gets_bell(self):
        assert decorate({'type': 'mystery'})['icon'] == DEFAULT_ICON

    @pytest.mark.parametrize('link,expected', [
        ('/applicants/a1/', '/applicants/a1/'),
        ('//evil.example.com/', ''),
        ('/\\evil.example.com/', ''),
        ('///evil.example.com/', ''),
        ('https://evil.example.com/', ''),
        ('javascript:alert(1)', ''),
        (None, ''),
    ])
    def test_safe_link(self, link, expected):
        assert safe_link(link) == expected


@pytest.fixture
def dashboard_api(requests_mock):
    requests_mock.get(f'{API_BASE_URL}/dashboard/stats', json={
        'jobs': {'total': 4, 'open': 3},
        'applicants': {'total': 20, 'new': 5, 'inReview': 4, 'generalPool': 2},
        'reviews': {'total': 9},
        'events': {'total': 2, 'upcoming': 1},
    })
    requests_mock.get(f'{API_BASE_URL}/dashboard/pipeline', json=[
        {'stage': 'new', 'count': 1, 'applicants': [ApplicantPayloadFactory(id='a1', firstName='Nina')]},
        {'stage': 'hired', 'count': 2, 'applicants': []},
    ])
    requests_mock.get(f'{API_BASE_URL}/dashboard/activity', json={
        'recentApplicants': [ApplicantPayloadFactory(id='a2', firstName='Omar', job={'title': 'Designer'})],
        'recentReviews': [{
            'id': 'r1', 'rating': 4, 'createdAt': '2026-01-05T10:00:00.000Z',
            'reviewer': {'name': 'Sam'}, 'applicant': {'id': 'a2', 'firstName': 'Omar', 'lastName': 'Applicant'},
        }],
    })
    requests_mock.get(f'{API_BASE_URL}/dashboard/sources', json={
        'sourceBreakdown': {'Handshake': {'total': 4, 'hired': 1, 'rejected': 0}},
    })
    event = EventPayloadFactory(id='e1', name='LSU Spring Fair')
    event['_count'] = {'applicants': 3}
    requests_mock.get(f'{API_BASE_URL}/dashboard/upcoming-events', json=[event])
    return requests_mock


class TestDashboardHomeView:

    def test_requires_sign_in(self, client):
        response = client.get(reverse('dashboard:home'))

        assert response.status_code == 403

    def test_renders_stats_and_activity(self, client, admin_user, dashboard_api):
        response = client.get(reverse('dashboard:home'))

        assert response.status_code == 200
        pipeline = {column['stage']: column for column in response.context['pipeline']}
        assert pipeline['new']['count'] == 1
        assert pipeline['hired']['count'] == 2
        assert pipeline['screening']['count'] == 0
        assert response.context['upcoming_events'][0]['name'] == 'LSU Spring Fair'
        content = response.content.decode()
        assert 'Omar' in content
        assert 'LSU Spring Fair' in content
        assert 'Handshake' in content

    def test_manager_without_event_access_skips_events(self, client, sign_in, dashboard_api):
        sign_in(role='hiring_manager', eventAccess=False)

        response = client.get(reverse('dashboard:home'))

        assert response.status_code == 200
        assert response.context['upcoming_events'] == []
        paths = [request.path for request in dashboard_api.request_history]
        assert '/api/dashboard/upcoming-events' not in paths

    def test_expired_token_is_denied(self, client, sign_in, requests_mock):
        sign_in()
        requests_mock.get(f'{API_BASE_URL}/auth/me', json={'error': 'Token expired'}, status_code=401)

        response = client.get(reverse('dashboard:home'))

        assert response.status_code == 403


class TestNotificationViews:

    NOTIFICATIONS = {
        'unreadCount': 2,
        'notifications': [
            {'id': 'n1', 'type': 'new_application', 'title': 'New application', 'message': 'Omar applied',
             'read': False, 'link': '/applicants/a2/', 'createdAt': '2026-01-05T10:00:00.000Z'},
            {'id': 'n2', 'type': 'review_added', 'title': 'Review added', 'message': 'Sam reviewed Omar',
             'read': True, 'createdAt': '2026-01-04T10:00:00.000Z'},
        ],
    }

    def test_list(self, client, reviewer_user, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/notifications', json=self.NOTIFICATIONS)

        response = client.get(reverse('dashboard:notifications'))

        assert response.status_code == 200
        assert response.context['unread_count'] == 2
        assert 'Omar applied' in response.content.decode()

    def test_unread_count_json(self, client, reviewer_user, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/notifications/unread-count', json={'count': 2})

        data = client.get(reverse('dashboard:unread_count')).json()

        assert data == {'count': 2}
        assert requests_mock.last_request.path == '/api/notifications/unread-count'

    def test_recent_notifications_json(self, client, reviewer_user, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/notifications', json=self.NOTIFICATIONS)

        data = client.get(reverse('dashboard:recent_notifications')).json()

        assert data['count'] == 2
        assert [n['id'] for n in data['notifications']] == ['n1', 'n2']
        assert data['notifications'][0]['icon'] == '\U0001F4E5'
        assert data['notifications'][1]['read'] is True

    def test_unread_count_survives_api_failure(self, client, reviewer_user, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/notifications/unread-count', status_code=500)

        data = client.get(reverse('dashboard:unread_count')).json()

        assert data == {'count': 0}

    def test_recent_notifications_survive_api_failure(self, client, reviewer_user, requests_mock):
        requests_mock.get(f'{API_BASE_URL}/notifications', status_code=500)

        data = client.get(reverse('dashboard:recent_notifications')).json()

        assert data == {'count': 0, 'notifications': []}

    def test_mark_read_follows_in_app_link(self, client, reviewer_user, requests_mock):
        requests_mock.patch(f'{API_BASE_URL}/notifications/n1/read', json={'id': 'n1', 'read': True})

        response = client.post(reverse('dashboard:mark_read', args=['n1']), {'link': '/applicants/a2/'})

        assert response.status_code == 302
        assert response['Location'] == '/applicants/a2/'
        assert requests_mock.last_request.method == 'PATCH'

    def test_mark_read_ignores_external_link(self, client, reviewer_user, requests_mock):
        requests_mock.patch(f'{API_BASE_URL}/notifications/n1/read', json={})

        response = client.post(reverse('dashboard:mark_read', args=['n1']), {'link': 'https://evil.example.com'})

        assert response['Location'] == reverse('dashboard:notifications')

    def test_mark_all_read(self, client, reviewer_user, requests_mock):
        requests_mock.post(f'{API_BASE_URL}/notifications/mark-all-read', json={'count': 2})

        response = client.post(reverse('dashboard:mark_all_read'))

        assert response.status_code == 302
        assert requests_mock.last_request.path == '/api/notifications/mark-all-read'
