"""
List state for API-backed tables.

The page, sort and filter state of every list lives in the URL query string,
so links can be shared and the back button works.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
from urllib.parse import urlencode

from django.conf import settings

ELLIPSIS = '...'
MAX_PAGE_SIZE = 100


@dataclass
class PaginatedResponse:
    data: List[Any]
    total: int
    page: int
    page_size: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def window(self) -> List[Union[int, str]]:
        return page_window(self.page, self.total_pages)

    @property
    def range_label(self) -> tuple:
        return page_range_label(self.page, self.page_size, self.total)


def is_paginated(payload: Any) -> bool:
    """A paginated payload is a mapping carrying ``data`` and ``totalPages``."""
    return isinstance(payload, dict) and 'data' in payload and 'totalPages' in payload


def normalize(payload: Any, page_size: int, page: int = 1) -> PaginatedResponse:
    """Wrap either API list shape into a PaginatedResponse."""
    if is_paginated(payload):
        return PaginatedResponse(
            data=list(payload['data']),
            total=int(payload.get('total', len(payload['data']))),
            page=int(payload.get('page', page)),
            page_size=int(payload.get('pageSize', page_size)),
            total_pages=int(payload['totalPages']),
        )
    items = list(payload or [])
    return PaginatedResponse(data=items, total=len(items), page=1, page_size=page_size, total_pages=1)


def page_window(page: int, total_pages: int) -> List[Union[int, str]]:
    """Page numbers to show, with '...' where pages are skipped."""
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    pages: List[Union[int, str]] = [1]
    if page > 3:
        pages.append(ELLIPSIS)
    for number in range(max(2, page - 1), min(total_pages - 1, page + 1) + 1):
        pages.append(number)
    if page < total_pages - 2:
        pages.append(ELLIPSIS)
    pages.append(total_pages)
    return pages


def page_range_label(page: int, page_size: int, total: int) -> tuple:
    """First and last item numbers shown on ``page``."""
    start = (page - 1) * page_size + 1
    end = min(page * page_size, total)
    return start, end


def _positive_int(value: Optional[str], default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass
class ListQuery:
    """
    Page, sort, search and filter state parsed from a request.

    ``api_names`` maps local filter keys to the API's parameter names where
    they differ (``event`` → ``eventId``).
    """

    page: int = 1
    page_size: int = 25
    sort: str = ''
    direction: str = 'asc'
    search: str = ''
    filters: Dict[str, str] = field(default_factory=dict)
    sortable: Sequence[str] = ()
    api_names: Dict[str, str] = field(default_factory=dict)
    paginate: bool = True
    default_page_size: int = 25

    @classmethod
    def from_request(
        cls,
        request,
        filters: Iterable[str] = (),
        sortable: Sequence[str] = (),
        default_sort: str = '',
        default_direction: str = 'asc',
        page_size: Optional[int] = None,
        api_names: Optional[Dict[str, str]] = None,
        paginate: bool = True,
    ) -> 'ListQuery':
        params = request.GET
        default_size = page_size or settings.DEFAULT_PAGE_SIZE
        sort = params.get('sort', default_sort)
        if sort not in sortable:
            sort = default_sort
        direction = params.get('dir', default_direction)
        if direction not in ('asc', 'desc'):
            direction = 'asc'
        return cls(
            page=_positive_int(params.get('page'), 1),
            page_size=min(_positive_int(params.get('pageSize'), default_size), MAX_PAGE_SIZE),
            sort=sort,
            direction=direction,
            search=params.get('search', '').strip(),
            filters={key: params.get(key, '').strip() for key in filters},
            sortable=tuple(sortable),
            api_names=dict(api_names or {}),
            paginate=paginate,
            default_page_size=default_size,
        )

    def api_params(self) -> Dict[str, str]:
        """Query parameters forwarded to the API list endpoint."""
        params = {}
        for key, value in self.filters.items():
            if value:
                params[self.api_names.get(key, key)] = value
        if self.search:
            params['search'] = self.search
        if self.sort:
            params['sort'] = self.sort
            params['dir'] = self.direction
        if self.paginate:
            params['page'] = str(self.page)
            params['pageSize'] = str(self.page_size)
        return params

    def state(self) -> Dict[str, str]:
        """The query-string representation of the current state."""
        state = {key: value for key, value in self.filters.items() if value}
        if self.search:
            state['search'] = self.search
        if self.sort:
            state['sort'] = self.sort
            state['dir'] = self.direction
        if self.page_size != self.default_page_size:
            state['pageSize'] = str(self.page_size)
        if self.page > 1:
            state['page'] = str(self.page)
        return state

    def querystring(self, **overrides) -> str:
        """
        Rebuild the query string with ``overrides`` applied.

        Changing anything other than the page sends the user back to page 1.
        A value of ``None`` or ``''`` removes the key.
        """
        state = self.state()
        if any(key != 'page' for key in overrides):
            state.pop('page', None)
        for key, value in overrides.items():
            if value in (None, '') or (key == 'page' and str(value) == '1'):
                state.pop(key, None)
            else:
                state[key] = str(value)
        return urlencode(state)

    def page_link(self, page: int) -> str:
        return '?' + self.querystring(page=page)

    def sort_link(self, field_name: str) -> str:
        """Clicking the active column flips direction; any other starts ascending."""
        if self.sort == field_name:
            direction = 'desc' if self.direction == 'asc' else 'asc'
        else:
            direction = 'asc'
        return '?' + self.querystring(sort=field_name, dir=direction)

    def sort_indicator(self, field_name: str) -> str:
        if self.sort != field_name:
            return '⇅'
        return '▲' if self.direction == 'asc' else '▼'
