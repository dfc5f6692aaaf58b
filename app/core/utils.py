"""
Utility functions.
"""
from datetime import datetime, timezone as dt_timezone
from typing import Optional

from django.http import HttpRequest
from django.utils import timezone
from django.utils.dateparse import parse_datetime, parse_date
from django.utils.http import url_has_allowed_host_and_scheme


def get_client_ip(request: HttpRequest) -> str:
    """Get client IP address from request."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR', '')
    return ip


def parse_api_datetime(value) -> Optional[datetime]:
    """Parse the ISO timestamps the API returns, tolerating a trailing Z."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    parsed = parse_datetime(text)
    if parsed is None:
        day = parse_date(text[:10])
        if day is None:
            return None
        parsed = datetime(day.year, day.month, day.day)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def relative_time(value, now: Optional[datetime] = None) -> str:
    """Short 'time ago' label used in the notification list."""
    moment = parse_api_datetime(value)
    if moment is None:
        return ''
    now = now or timezone.now()
    seconds = max(0, (now - moment).total_seconds())
    minutes = int(seconds // 60)
    if minutes < 1:
        return 'just now'
    if minutes < 60:
        return f'{minutes}m ago'
    hours = minutes // 60
    if hours < 24:
        return f'{hours}h ago'
    days = hours // 24
    if days < 7:
        return f'{days}d ago'
    return moment.strftime('%b %d, %Y')


def average_rating(reviews) -> Optional[str]:
    """Mean review rating with one decimal, or None without reviews."""
    ratings = [review.get('rating') for review in reviews or [] if review.get('rating') is not None]
    if not ratings:
        return None
    return f'{sum(ratings) / len(ratings):.1f}'


def safe_next_url(request: HttpRequest, fallback: str) -> str:
    """The posted or queried ``next`` URL when it stays on this site."""
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return next_url
    return fallback


def as_list(payload) -> list:
    """Items of an API list response, paginated or not."""
    if isinstance(payload, dict):
        return list(payload.get('data') or [])
    return list(payload or [])


def find_by_id(items, pk):
    """The item whose ``id`` matches ``pk``, or None."""
    return next((item for item in items if str(item.get('id')) == str(pk)), None)
