"""
Views for emails app.
"""
import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.translation import gettext as _
from django.views.generic import TemplateView

from core.api import ApiError
from core.mixins import PortalPermissionMixin, ManagerRequiredMixin
from core.utils import as_list
from .constants import TEMPLATE_OPTIONS, SITE_CONTENT_OPTIONS, get_template_option, get_content_option
from .forms import EmailTemplateForm, SiteContentForm, UserAssignmentForm, NotificationSubscriptionsForm

logger = logging.getLogger(__name__)


class SettingsFormView(TemplateView):
    """
    A settings page that loads its form from the API and saves it back.

    Subclasses implement ``load_initial``, ``build_form`` and ``save``.
    """

    success_message = _('Settings saved.')

    def build_form(self, data=None, initial=None):
        raise NotImplementedError

    def load_initial(self):
        return {}

    def save(self, form):
        raise NotImplementedError

    def get_redirect_url(self):
        return self.request.get_full_path()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        if 'form' not in kwargs:
            context['form'] = self.build_form(initial=self.load_initial())
        return context

    def post(self, request, *args, **kwargs):
        form = self.build_form(data=request.POST)
        if form.is_valid():
            try:
                self.save(form)
            except ApiError as e:
                form.add_error(None, e.message)
            else:
                messages.success(request, self.success_message)
                return redirect(self.get_redirect_url())
        return self.render_to_response(self.get_context_data(form=form))


class SiteContentView(ManagerRequiredMixin, SettingsFormView):
    """Edit the careers-site copy blocks."""
    template_name = 'emails/site_content.html'
    success_message = _('Content saved.')

    @property
    def option(self):
        return get_content_option(self.request.GET.get('key', ''))

    def build_form(self, data=None, initial=None):
        return SiteContentForm(data=data, initial=initial)

    def load_initial(self):
        setting = self.api.get(f'/settings/{self.option.key}') or {}
        return {'value': setting.get('value') or ''}

    def save(self, form):
        self.api.put(f'/settings/{self.option.key}', {'value': form.cleaned_data['value']})

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({'options': SITE_CONTENT_OPTIONS, 'selected': self.option})
        return context


class EmailTemplateView(ManagerRequiredMixin, SettingsFormView):
    """Edit an email template's subject and body."""
    template_name = 'emails/template_form.html'
    success_message = _('Template saved.')

    @property
    def option(self):
        return get_template_option(self.request.GET.get('type', ''))

    def build_form(self, data=None, initial=None):
        return EmailTemplateForm(data=data, initial=initial)

    def load_initial(self):
        template = self.api.get(f'/email-settings/templates/{self.option.type}') or {}
        return {'subject': template.get('subject', ''), 'body': template.get('body', '')}

    def save(self, form):
        self.api.put(f'/email-settings/templates/{self.option.type}', {
            'subject': form.cleaned_data['subject'],
            'body': form.cleaned_data['body'],
        })

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({'options': TEMPLATE_OPTIONS, 'selected': self.option})
        return context


class ReviewerAccessView(ManagerRequiredMixin, SettingsFormView):
    """Assign reviewers to a job or an event."""
    template_name = 'emails/reviewer_access.html'
    success_message = _('Reviewer access saved.')

    @property
    def mode(self):
        return 'events' if self.request.GET.get('mode') == 'events' else 'jobs'

    @property
    def selected_id(self):
        return self.request.GET.get('id', '')

    def endpoint(self):
        return f'/email-settings/{self.mode}/{self.selected_id}/reviewers'

    def build_form(self, data=None, initial=None):
        if not hasattr(self, '_reviewers'):
            self._reviewers = as_list(self.api.get('/email-settings/reviewers'))
        return UserAssignmentForm(self._reviewers, data=data, initial=initial)

    def load_initial(self):
        if not self.selected_id:
            return {}
        return {'users': [str(a.get('userId')) for a in as_list(self.api.get(self.endpoint()))]}

    def save(self, form):
        self.api.put(self.endpoint(), form.to_payload())

    def post(self, request, *args, **kwargs):
        if not self.selected_id:
            messages.error(request, _('Select a job or event first.'))
            return redirect(request.get_full_path())
        return super().post(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        if self.mode == 'jobs':
            targets = [
                {'id': job['id'], 'label': job.get('title', '')}
                for job in as_list(self.api.get('/jobs', params={'status': 'open'}))
            ]
        else:
            targets = [
                {'id': event['id'], 'label': event.get('name', '')}
                for event in as_list(self.api.get('/events'))
            ]
        context.update({
            'mode': self.mode,
            'targets': targets,
            'selected_id': self.selected_id,
        })
        return context


class JobSubscribersView(ManagerRequiredMixin, SettingsFormView):
    """Choose who is emailed about new applicants for a job."""
    template_name = 'emails/job_subscribers.html'
    success_message = _('Subscribers saved.')

    @property
    def job_id(self):
        return self.request.GET.get('job', '')

    def build_form(self, data=None, initial=None):
        if not hasattr(self, '_users'):
            self._users = as_list(self.api.get('/email-settings/users'))
        return UserAssignmentForm(self._users, data=data, initial=initial)

    def load_initial(self):
        if not self.job_id:
            return {}
        subscribers = as_list(self.api.get(f'/email-settings/jobs/{self.job_id}/subscribers'))
        return {'users': [str(sub.get('userId')) for sub in subscribers]}

    def save(self, form):
        self.api.put(f'/email-settings/jobs/{self.job_id}/subscribers', form.to_payload())

    def post(self, request, *args, **kwargs):
        if not self.job_id:
            messages.error(request, _('Select a job first.'))
            return redirect(request.get_full_path())
        return super().post(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({
            'jobs': as_list(self.api.get('/jobs', params={'status': 'open'})),
            'job_id': self.job_id,
        })
        return context


class NotificationSubscriptionsView(PortalPermissionMixin, SettingsFormView):
    """The current user's in-app notification subscriptions."""
    template_name = 'emails/notification_subscriptions.html'
    success_message = _('Notification preferences saved.')

    def build_form(self, data=None, initial=None):
        if not hasattr(self, '_options'):
            self._options = self.api.get('/email-settings/notification-subs/options') or {}
        return NotificationSubscriptionsForm(self._options, data=data, initial=initial)

    def load_initial(self):
        subscriptions = as_list(self.api.get('/email-settings/notification-subs'))
        return NotificationSubscriptionsForm.initial_from_subscriptions(subscriptions)

    def save(self, form):
        subscriptions = form.to_subscriptions()
        self.api.put('/email-settings/notification-subs', {'subscriptions': subscriptions})
        logger.info(f"{self.portal_user.email} saved {len(subscriptions)} notification subscription(s)")

    def get_redirect_url(self):
        return reverse('emails:notification_subscriptions')
