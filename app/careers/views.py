"""
Public careers pages: open positions and the application form.
"""
import logging

from django.conf import settings
from django.shortcuts import render
from django.utils.decorators import method_decorator
from django.utils.translation import gettext as _
from django.views.generic import TemplateView
from django_ratelimit.decorators import ratelimit

from core.api import ApiError
from core.utils import as_list, get_client_ip
from .forms import ApplyForm, PublicJobFilterForm

logger = logging.getLogger(__name__)


def get_public_content(api, key: str) -> str:
    """A public site-content block, or an empty string when unset."""
    try:
        setting = api.get(f'/settings/public/{key}') or {}
    except ApiError as e:
        if not e.is_not_found:
            logger.warning(f"Could not load site content '{key}': {e.message}")
        return ''
    return setting.get('value') or ''


def rate_limited(request, exception):
    """Shown when an address submits too many applications."""
    logger.warning(f"Application rate limit hit from {get_client_ip(request)}")
    return render(request, 'careers/rate_limited.html', status=429)


class PublicJobListView(TemplateView):
    template_name = 'careers/job_list.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        filter_form = PublicJobFilterForm(self.request.GET)
        context.update({
            'jobs': as_list(self.request.api.get('/jobs/public', params=filter_form.api_params())),
            'filter_form': filter_form,
            'intro': get_public_content(self.request.api, 'positions_intro'),
            'about': get_public_content(self.request.api, 'about_whlc'),
        })
        return context


@method_decorator(
    ratelimit(key='ip', rate=settings.APPLY_RATE_LIMIT, method='POST', block=True),
    name='post',
)
class ApplyView(TemplateView):
    """
    Apply for an open job.

    The landing query string (``source``, ``ref`` and ``utm_*``) is carried
    through the form as hidden fields and attributed on the applicant.
    """
    template_name = 'careers/apply.html'
    unavailable_template_name = 'careers/job_unavailable.html'
    success_template_name = 'careers/apply_done.html'

    def get_job(self):
        if not hasattr(self, '_job'):
            try:
                self._job = self.request.api.get(f"/jobs/{self.kwargs['pk']}/public")
            except ApiError as e:
                if not e.is_not_found:
                    raise
                self._job = None
        return self._job

    def is_open(self) -> bool:
        job = self.get_job()
        return bool(job) and job.get('status') == 'open'

    def tracking(self) -> dict:
        source = self.request.POST if self.request.method == 'POST' else self.request.GET
        keys = ('source', 'ref', 'utm_source', 'utm_medium', 'utm_campaign', 'utm_content')
        return {key: source.get(key, '')[:200] for key in keys if source.get(key)}

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.setdefault('form', ApplyForm())
        context.update({
            'job': self.get_job(),
            'tracking': self.tracking(),
        })
        return context

    def get(self, request, *args, **kwargs):
        if not self.is_open():
            return render(request, self.unavailable_template_name, status=404)
        return super().get(request, *args, **kwargs)

    def post(self, request, *args, **kwargs):
        if not self.is_open():
            return render(request, self.unavailable_template_name, status=404)

        form = ApplyForm(request.POST, request.FILES)
        if form.is_valid():
            job = self.get_job()
            try:
                request.api.upload(
                    '/applicants',
                    form.to_payload(job['id'], tracking=self.tracking()),
                    form.files_payload(),
                )
            except ApiError as e:
                form.add_error(None, e.message or _('Failed to submit application'))
            else:
                logger.info(f"Application received for job {job['id']} via {self.tracking().get('source', 'direct')}")
                return render(request, self.success_template_name, {'job': job})
        return self.render_to_response(self.get_context_data(form=form))
