"""
Tests for list paging, sorting and query-string state.
"""
import pytest

from core.pagination import ListQuery, PaginatedResponse, normalize, page_range_label, page_window


class TestPageWindow:

    def test_short_lists_show_every_page(self):
        assert page_window(3, 7) == [1, 2, 3, 4, 5, 6, 7]

    def test_first_page_of_long_list(self):
        assert page_window(1, 20) == [1, 2, '...', 20]

    def test_middle_page_has_both_ellipses(self):
        assert page_window(10, 20) == [1, '...', 9, 10, 11, '...', 20]

    def test_last_page_of_long_list(self):
        assert page_window(20, 20) == [1, '...', 19, 20]

    def test_near_start_has_no_leading_ellipsis(self):
        assert page_window(3, 10) == [1, 2, 3, 4, '...', 10]


class TestNormalize:

    def test_paginated_payload(self):
        page = normalize({'data': [{'id': 1}], 'total': 51, 'page': 3, 'pageSize': 25, 'totalPages': 3}, 25)

        assert page.total == 51
        assert page.page == 3
        assert page.has_previous
        assert not page.has_next
        assert page.range_label == (51, 51)

    def test_plain_list_is_one_page(self):
        page = normalize([{'id': 1}, {'id': 2}], 25)

        assert page == PaginatedResponse(data=[{'id': 1}, {'id': 2}], total=2, page=1, page_size=25, total_pages=1)

    def test_none_is_empty(self):
        assert normalize(None, 25).data == []

    def test_range_label(self):
        assert page_range_label(2, 25, 60) == (26, 50)


class TestListQuery:

    @pytest.fixture
    def query(self, rf):
        request = rf.get('/applicants/', {
            'page': '3', 'sort': 'name', 'dir': 'desc', 'stage': 'new', 'search': ' ada ', 'event': 'e1',
        })
        return ListQuery.from_request(
            request, filters=('stage', 'event'), sortable=('name', 'createdAt'),
            default_sort='createdAt', default_direction='desc', api_names={'event': 'eventId'},
        )

    def test_parses_state(self, query):
        assert query.page == 3
        assert query.sort == 'name'
        assert query.direction == 'desc'
        assert query.search == 'ada'
        assert query.filters == {'stage': 'new', 'event': 'e1'}

    def test_api_params_rename_filters(self, query):
        assert query.api_params() == {
            'stage': 'new', 'eventId': 'e1', 'search': 'ada',
            'sort': 'name', 'dir': 'desc', 'page': '3', 'pageSize': '25',
        }

    def test_unknown_sort_and_direction_fall_back(self, rf):
        request = rf.get('/', {'sort': 'password', 'dir': 'sideways', 'page': '-2'})

        query = ListQuery.from_request(request, sortable=('name',), default_sort='name')

        assert query.sort == 'name'
        assert query.direction == 'asc'
        assert query.page == 1

    def test_changing_a_filter_resets_the_page(self, query):
        querystring = query.querystring(stage='screening')

        assert 'page=' not in querystring
        assert 'stage=screening' in querystring

    def test_clearing_a_filter_removes_it(self, query):
        assert 'stage=' not in query.querystring(stage='')

    def test_page_link_keeps_filters(self, query):
        link = query.page_link(4)

        assert link.startswith('?')
        assert 'page=4' in link
        assert 'stage=new' in link

    def test_page_one_is_dropped(self, query):
        assert 'page=' not in query.page_link(1)

    def test_sort_link_toggles_active_column(self, query):
        assert 'dir=asc' in query.sort_link('name')
        assert 'dir=asc' in query.sort_link('createdAt')

    def test_sort_indicator(self, query):
        assert query.sort_indicator('name') == '▼'
        assert query.sort_indicator('createdAt') == '⇅'

    def test_unpaginated_query_has_no_page_params(self, rf):
        query = ListQuery.from_request(rf.get('/'), paginate=False)

        assert 'page' not in query.api_params()
        assert 'pageSize' not in query.api_params()

    def test_page_size_from_query_is_kept(self, rf):
        query = ListQuery.from_request(rf.get('/', {'pageSize': '50', 'page': '2'}))

        assert query.page_size == 50
        assert query.api_params() == {'page': '2', 'pageSize': '50'}
        assert query.page_link(3) == '?pageSize=50&page=3'

    def test_page_size_is_capped(self, rf):
        query = ListQuery.from_request(rf.get('/', {'pageSize': '5000'}))

        assert query.page_size == 100

    @pytest.mark.parametrize('value', ['abc', '0', '-5'])
    def test_invalid_page_size_uses_default(self, rf, value):
        query = ListQuery.from_request(rf.get('/', {'pageSize': value}))

        assert query.page_size == 25
        assert 'pageSize' not in query.state()

    def test_changing_page_size_resets_the_page(self, query):
        querystring = query.querystring(pageSize=50)

        assert 'pageSize=50' in querystring
        assert 'page=' not in querystring.replace('pageSize=', '')
