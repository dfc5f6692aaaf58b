"""
Views for dashboard app.
"""
import logging

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect
from django.utils.translation import gettext as _
from django.views import View
from django.views.generic import TemplateView

from core.api import ApiError
from core.mixins import PortalPermissionMixin
from core.utils import as_list
from recruiting.constants import STAGE_CHOICES
from .analytics import source_cards
from .notifications import decorate, safe_link

logger = logging.getLogger(__name__)


class DashboardHomeView(PortalPermissionMixin, TemplateView):
    """Headline counts, pipeline snapshot, recent activity and source analytics."""
    template_name = 'dashboard/home.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        stats = self.api.get('/dashboard/stats') or {}
        pipeline = {
            column.get('stage'): column
            for column in as_list(self.api.get('/dashboard/pipeline'))
        }
        activity = self.api.get('/dashboard/activity') or {}
        sources = self.api.get('/dashboard/sources') or {}

        upcoming_events = []
        if self.portal_user.can_see_events:
            upcoming_events = as_list(self.api.get('/dashboard/upcoming-events'))

        context.update({
            'stats': stats,
            'pipeline': [
                {
                    'stage': stage,
                    'label': label,
                    'count': (pipeline.get(stage) or {}).get('count', 0),
                    'applicants': (pipeline.get(stage) or {}).get('applicants') or [],
                }
                for stage, label in STAGE_CHOICES
            ],
            'recent_applicants': activity.get('recentApplicants') or [],
            'recent_reviews': activity.get('recentReviews') or [],
            'source_cards': source_cards(sources.get('sourceBreakdown')),
            'upcoming_events': upcoming_events,
        })
        return context


class NotificationListView(PortalPermissionMixin, TemplateView):
    template_name = 'dashboard/notifications.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        payload = self.api.get('/notifications') or {}
        context.update({
            'notifications': [decorate(n) for n in payload.get('notifications') or []],
            'unread_count': payload.get('unreadCount', 0),
        })
        return context


class UnreadCountView(PortalPermissionMixin, View):
    """Polled by the notification bell."""

    def get(self, request):
        try:
            payload = self.api.get('/notifications/unread-count') or {}
        except ApiError as e:
            logger.info(f"Notification poll failed: {e.message}")
            payload = {}
        return JsonResponse({'count': payload.get('count', 0)})


class RecentNotificationsView(PortalPermissionMixin, View):
    """Latest notifications for the bell dropdown, loaded when it opens."""

    def get(self, request):
        try:
            payload = self.api.get('/notifications') or {}
        except ApiError as e:
            logger.warning(f"Loading notifications failed: {e.message}")
            return JsonResponse({'count': 0, 'notifications': []})
        notifications = [decorate(n) for n in (payload.get('notifications') or [])[:10]]
        return JsonResponse({
            'count': payload.get('unreadCount', 0),
            'notifications': [
                {
                    'id': n.get('id'),
                    'title': n.get('title', ''),
                    'message': n.get('message', ''),
                    'read': bool(n.get('read')),
                    'icon': n['icon'],
                    'time_ago': n['time_ago'],
                }
                for n in notifications
            ],
        })


class MarkNotificationReadView(PortalPermissionMixin, View):
    """Mark one notification read, then follow its link."""

    def post(self, request, pk):
        try:
            self.api.patch(f'/notifications/{pk}/read')
        except ApiError as e:
            logger.warning(f"Failed to mark notification {pk} read: {e.message}")
        link = safe_link(request.POST.get('link'))
        return redirect(link or 'dashboard:notifications')


class MarkAllReadView(PortalPermissionMixin, View):

    def post(self, request):
        try:
            self.api.post('/notifications/mark-all-read')
        except ApiError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, _('All notifications marked as read.'))
        return redirect('dashboard:notifications')
