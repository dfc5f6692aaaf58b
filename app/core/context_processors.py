"""
Context processors for the applicant-tracking portal.
"""
from typing import Any, Dict
from django.conf import settings
from django.http import HttpRequest

from .middleware import get_portal_user


def portal_user(request: HttpRequest) -> Dict[str, Any]:
    """Add the signed-in user to template context."""
    if not hasattr(request, 'api'):
        return {'portal_user': None}
    return {
        'portal_user': get_portal_user(request),
    }


def polling_intervals(request: HttpRequest) -> Dict[str, Any]:
    """Add client refresh intervals to template context."""
    return {
        'notification_poll_ms': settings.NOTIFICATION_POLL_SECONDS * 1000,
        'live_interview_poll_ms': settings.LIVE_INTERVIEW_POLL_SECONDS * 1000,
    }
