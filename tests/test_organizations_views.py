"""
Tests for office and user administration.
"""
from django.urls import reverse

from factories import API_BASE_URL, OfficePayloadFactory, UserPayloadFactory


def api(endpoint):
    return f'{API_BASE_URL}{endpoint}'


class TestAdminOnly:

    def test_manager_cannot_manage_users(self, client, manager_user):
        assert client.get(reverse('organizations:user_list')).status_code == 403

    def test_manager_cannot_manage_offices(self, client, manager_user):
        assert client.get(reverse('organizations:office_list')).status_code == 403


class TestOfficeViews:

    def test_list(self, client, admin_user, requests_mock):
        requests_mock.get(api('/offices'), json=[OfficePayloadFactory(name='Shreveport Studio')])

        response = client.get(reverse('organizations:office_list'))

        assert 'Shreveport Studio' in response.content.decode()

    def test_create(self, client, admin_user, requests_mock):
        requests_mock.post(api('/offices'), json={'id': 'o9'}, status_code=201)

        response = client.post(reverse('organizations:office_create'), {
            'name': ' Lafayette ', 'address': '1 Main St', 'city': 'Lafayette', 'state': 'LA',
            'zip': '70501', 'phone': '337-555-0100',
        })

        assert response.status_code == 302
        assert requests_mock.last_request.json()['name'] == 'Lafayette'

    def test_edit_unknown_office_is_404(self, client, admin_user, requests_mock):
        requests_mock.get(api('/offices'), json=[OfficePayloadFactory(id='o1')])

        assert client.get(reverse('organizations:office_update', args=['o2'])).status_code == 404

    def test_delete(self, client, admin_user, requests_mock):
        requests_mock.delete(api('/offices/o1'), status_code=204)

        response = client.post(reverse('organizations:office_delete', args=['o1']))

        assert response['Location'] == reverse('organizations:office_list')


class TestUserViews:

    def test_create_scoped_manager(self, client, admin_user, requests_mock):
        requests_mock.get(api('/email-settings/notification-subs/options'), json={
            'departments': ['Architecture', 'Interiors'], 'offices': [{'id': 'o1', 'name': 'Baton Rouge'}],
        })
        requests_mock.post(api('/users'), json={'id': 'u9'}, status_code=201)

        response = client.post(reverse('organizations:user_create'), {
            'name': 'Pat Manager', 'email': 'pat@whlc.com', 'password': 'Blueprint9', 'role': 'hiring_manager',
            'scoped_departments': ['Interiors'], 'scoped_offices': ['o1'], 'scope_mode': 'and',
            'event_access': 'on',
        })

        assert response.status_code == 302
        body = requests_mock.last_request.json()
        assert body['scopedDepartments'] == ['Interiors']
        assert body['scopedOffices'] == ['o1']
        assert body['scopeMode'] == 'and'
        assert body['eventAccess'] is True
        assert body['offerAccess'] is False

    def test_weak_password_is_rejected(self, client, admin_user, requests_mock):
        requests_mock.get(api('/email-settings/notification-subs/options'), json={})

        response = client.post(reverse('organizations:user_create'), {
            'name': 'Pat', 'email': 'pat@whlc.com', 'password': 'short', 'role': 'reviewer', 'scope_mode': 'or',
        })

        assert response.status_code == 200
        assert 'Password must be at least 8 characters' in response.content.decode()
        assert not any(r.method == 'POST' for r in requests_mock.request_history)

    def test_edit_without_password(self, client, admin_user, requests_mock):
        user = UserPayloadFactory(id='u5', role='reviewer')
        requests_mock.get(api('/users'), json={'data': [user], 'total': 1, 'page': 1, 'pageSize': 100, 'totalPages': 1})
        requests_mock.get(api('/email-settings/notification-subs/options'), json={})
        requests_mock.put(api('/users/u5'), json=user)

        response = client.post(reverse('organizations:user_update', args=['u5']), {
            'name': 'Renamed', 'email': user['email'], 'password': '', 'role': 'reviewer', 'scope_mode': 'or',
        })

        assert response.status_code == 302
        body = requests_mock.last_request.json()
        assert body['name'] == 'Renamed'
        assert 'password' not in body

    def test_edit_finds_user_on_a_later_page(self, client, admin_user, requests_mock):
        user = UserPayloadFactory(id='u205', role='reviewer', name='Late Page')
        requests_mock.get(api('/users?page=1'), json={
            'data': UserPayloadFactory.build_batch(2), 'total': 102, 'page': 1, 'pageSize': 100, 'totalPages': 2,
        })
        requests_mock.get(api('/users?page=2'), json={
            'data': [user], 'total': 102, 'page': 2, 'pageSize': 100, 'totalPages': 2,
        })
        requests_mock.get(api('/email-settings/notification-subs/options'), json={})

        response = client.get(reverse('organizations:user_update', args=['u205']))

        assert response.status_code == 200
        assert response.context['edited_user']['name'] == 'Late Page'

    def test_edit_missing_user_is_404(self, client, admin_user, requests_mock):
        requests_mock.get(api('/users'), json={
            'data': [UserPayloadFactory()], 'total': 1, 'page': 1, 'pageSize': 100, 'totalPages': 1,
        })
        requests_mock.get(api('/email-settings/notification-subs/options'), json={})

        response = client.get(reverse('organizations:user_update', args=['nobody']))

        assert response.status_code == 404

    def test_cannot_delete_self(self, client, admin_user, requests_mock):
        response = client.post(reverse('organizations:user_delete', args=[admin_user['id']]))

        assert response.status_code == 302
        assert not any(r.method == 'DELETE' for r in requests_mock.request_history)
