"""
In-app notification display helpers.
"""
from django.utils.http import url_has_allowed_host_and_scheme

from core.utils import relative_time

TYPE_ICONS = {
    'new_application': '\U0001F4E5',
    'review_added': '⭐',
    'stage_changed': '➡️',
    'review_request': '\U0001F4CB',
    'interview_scheduled': '\U0001F4C5',
    'interview_cancelled': '❌',
    'offer_extended': '\U0001F4E8',
    'offer_accepted': '✅',
    'offer_declined': '\U0001F6AB',
    'offer_rescinded': '⚠️',
}

DEFAULT_ICON = '\U0001F514'


def decorate(notification: dict) -> dict:
    """Add the icon and relative time shown in the notification list."""
    notification['icon'] = TYPE_ICONS.get(notification.get('type'), DEFAULT_ICON)
    notification['time_ago'] = relative_time(notification.get('createdAt'))
    return notification


def safe_link(link) -> str:
    """Notification links are in-app paths; anything else is dropped."""
    if link and link.startswith('/') and url_has_allowed_host_and_scheme(link, allowed_hosts=None):
        return link
    return ''
