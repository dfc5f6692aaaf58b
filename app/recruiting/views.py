"""
Views for recruiting app.
"""
import json
import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.messages.views import SuccessMessageMixin
from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.translation import gettext as _
from django.views import View
from django.views.generic import TemplateView, FormView

from core.api import ApiError
from core.mixins import PortalPermissionMixin, ManagerRequiredMixin
from core.pagination import ListQuery, normalize
from core.platforms import get_job_board, tracking_url
from core.utils import as_list, average_rating, safe_next_url
from .constants import STAGE_CHOICES, MOVABLE_STAGES, JOB_STATUS_CHOICES, INTERVIEW_OUTCOME_CHOICES, INTERVIEW_STATUS_CHOICES
from .feedback import find_participant, feedback_body, refresh_payload
from .forms import (
    JobForm, JobStatusForm, PlatformStatusForm, LinkedInStatusForm,
    ApplicantSearchForm, ApplicantForm, StageForm, NoteForm, ReviewForm,
    RequestReviewForm, InterviewForm, InterviewStatusForm, InterviewOutcomeForm,
    NotesUrlForm, FeedbackForm,
)
from .pipeline import PipelineBoard, move_applicant

logger = logging.getLogger(__name__)


def _with_average(applicants):
    for applicant in applicants:
        applicant['average_rating'] = average_rating(applicant.get('reviews'))
    return applicants


# Job Views
class JobListView(PortalPermissionMixin, TemplateView):
    """List jobs."""
    template_name = 'recruiting/job_list.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        query = ListQuery.from_request(self.request, filters=('status', 'archived'))

        # Archived jobs are an admin view; it ignores the status filter.
        if query.filters.get('archived') and not self.portal_user.is_admin:
            query.filters['archived'] = ''
        if query.filters.get('archived'):
            query.filters['archived'] = 'true'
            query.filters['status'] = ''

        page = normalize(self.api.get('/jobs', params=query.api_params()), query.page_size, query.page)
        context.update({
            'jobs': page.data,
            'page': page,
            'query': query,
            'status_choices': JOB_STATUS_CHOICES,
            'can_create': self.portal_user.can_manage,
            'show_archived': bool(query.filters.get('archived')),
        })
        return context


class JobCreateView(ManagerRequiredMixin, SuccessMessageMixin, FormView):
    """Create new job."""
    form_class = JobForm
    template_name = 'recruiting/job_form.html'
    success_message = _('Job created successfully!')

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['offices'] = as_list(self.api.get('/offices'))
        return kwargs

    def form_valid(self, form):
        try:
            self.job = self.api.post('/jobs', form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        logger.info(f"Job created: {self.job.get('id')} by {self.portal_user.email}")
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('recruiting:job_detail', kwargs={'pk': self.job['id']})


class JobUpdateView(ManagerRequiredMixin, SuccessMessageMixin, FormView):
    """Update job."""
    form_class = JobForm
    template_name = 'recruiting/job_form.html'
    success_message = _('Job updated successfully!')

    def get_job(self):
        if not hasattr(self, '_job'):
            self._job = self.api.get(f"/jobs/{self.kwargs['pk']}")
        return self._job

    def get_initial(self):
        return JobForm.initial_from_job(self.get_job())

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['offices'] = as_list(self.api.get('/offices'))
        kwargs['editing'] = True
        return kwargs

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['job'] = self.get_job()
        return context

    def form_valid(self, form):
        try:
            self.api.put(f"/jobs/{self.kwargs['pk']}", form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('recruiting:job_detail', kwargs={'pk': self.kwargs['pk']})


class JobDetailView(PortalPermissionMixin, TemplateView):
    """Job detail view."""
    template_name = 'recruiting/job_detail.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        job = self.api.get(f"/jobs/{self.kwargs['pk']}")
        context.update({
            'job': job,
            'applicants': _with_average(job.get('applicants') or []),
            'application_link': f"{settings.PUBLIC_SITE_URL.rstrip('/')}/apply/{job['id']}/",
            'status_form': JobStatusForm(initial={'status': job.get('status')}),
            'can_manage': self.portal_user.can_manage,
        })
        return context


class JobStatusView(ManagerRequiredMixin, View):
    """Change a job's status."""

    def post(self, request, pk):
        form = JobStatusForm(request.POST)
        if not form.is_valid():
            messages.error(request, _('Invalid status'))
        else:
            try:
                self.api.put(f'/jobs/{pk}', {'status': form.cleaned_data['status']})
                messages.success(request, _('Job status updated.'))
            except ApiError as e:
                messages.error(request, e.message)
        return redirect('recruiting:job_detail', pk=pk)


class JobTrackingLinksView(ManagerRequiredMixin, TemplateView):
    """Per-platform tracking links and posting status for a job."""
    template_name = 'recruiting/job_tracking.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        pk = self.kwargs['pk']
        payload = self.api.get(f'/jobs/{pk}/platforms') or {}
        platforms = payload.get('platforms', []) if isinstance(payload, dict) else list(payload)
        for item in platforms:
            if not item.get('trackingUrl'):
                board = get_job_board(item.get('id'))
                if board is not None:
                    item['trackingUrl'] = tracking_url(board, pk, settings.PUBLIC_SITE_URL)
        context.update({
            'job_id': pk,
            'platforms': platforms,
            'form': kwargs.get('form') or PlatformStatusForm(),
        })
        return context

    def post(self, request, pk):
        form = PlatformStatusForm(request.POST)
        if form.is_valid():
            try:
                self.api.patch(f'/jobs/{pk}/platform-status', form.to_payload())
            except ApiError as e:
                messages.error(request, e.message)
            else:
                messages.success(request, _('Posting status updated.'))
                return redirect('recruiting:job_tracking', pk=pk)
        return self.render_to_response(self.get_context_data(form=form))


class JobLinkedInView(ManagerRequiredMixin, TemplateView):
    """LinkedIn post preview and posted status."""
    template_name = 'recruiting/job_linkedin.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        pk = self.kwargs['pk']
        preview = self.api.get(f'/jobs/{pk}/linkedin-preview')
        context.update({
            'job_id': pk,
            'preview': preview,
            'form': kwargs.get('form') or LinkedInStatusForm(initial={'post_url': preview.get('postUrl') or ''}),
        })
        return context

    def post(self, request, pk):
        form = LinkedInStatusForm(request.POST)
        if form.is_valid():
            try:
                self.api.patch(f'/jobs/{pk}/linkedin-status', form.to_payload())
            except ApiError as e:
                messages.error(request, e.message)
            else:
                if form.cleaned_data['posted']:
                    messages.success(request, _('Marked as posted to LinkedIn.'))
                else:
                    messages.success(request, _('Marked as not posted to LinkedIn.'))
                return redirect('recruiting:job_detail', pk=pk)
        return self.render_to_response(self.get_context_data(form=form))


# Applicant Views
class ApplicantListView(PortalPermissionMixin, TemplateView):
    """List applicants with search, stage filter and the spam queue."""
    template_name = 'recruiting/applicant_list.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        query = ListQuery.from_request(
            self.request, filters=('stage', 'spam'),
            sortable=('name', 'createdAt'), default_sort='createdAt', default_direction='desc',
        )
        show_spam = query.filters.get('spam') == 'true'
        query.filters['spam'] = 'true' if show_spam else ''

        params = query.api_params()
        params['spam'] = 'true' if show_spam else 'false'
        page = normalize(self.api.get('/applicants', params=params), query.page_size, query.page)

        can_manage = self.portal_user.can_manage
        spam_count = 0
        if can_manage:
            try:
                spam_count = (self.api.get('/dashboard/stats') or {}).get('spamCount', 0)
            except ApiError as e:
                logger.info(f"Spam count unavailable: {e.message}")

        context.update({
            'applicants': _with_average(page.data),
            'page': page,
            'query': query,
            'search_form': ApplicantSearchForm(self.request.GET),
            'stages': STAGE_CHOICES,
            'show_spam': show_spam,
            'spam_count': spam_count,
            'can_manage': can_manage,
        })
        return context


class ApplicantBulkActionView(ManagerRequiredMixin, View):
    """Bulk delete, bulk mark-as-spam and delete-all-spam."""

    def post(self, request):
        action = request.POST.get('action')
        ids = [value for value in request.POST.getlist('ids') if value]
        back = safe_next_url(request, reverse('recruiting:applicant_list'))

        if action == 'delete_spam':
            endpoint, body, done = '/applicants/spam', None, _('All spam applicants deleted.')
        elif action in ('delete', 'mark_spam'):
            if not ids:
                messages.warning(request, _('Select at least one applicant.'))
                return redirect(back)
            if action == 'delete':
                endpoint, done = '/applicants/bulk-delete', _('%(count)d applicant(s) deleted.')
            else:
                endpoint, done = '/applicants/bulk-mark-spam', _('%(count)d applicant(s) marked as spam.')
            body = {'ids': ids}
        else:
            messages.error(request, _('Unknown action.'))
            return redirect(back)

        try:
            if body is None:
                self.api.delete(endpoint)
            else:
                self.api.post(endpoint, body)
        except ApiError as e:
            messages.error(request, e.message)
        else:
            logger.info(f"Bulk applicant action {action} on {len(ids)} applicant(s) by {self.portal_user.email}")
            messages.success(request, done % {'count': len(ids)} if body else done)
        return redirect(back)


class ApplicantCreateView(ManagerRequiredMixin, SuccessMessageMixin, FormView):
    """Manually add an applicant."""
    form_class = ApplicantForm
    template_name = 'recruiting/applicant_form.html'
    success_message = _('Applicant added successfully!')

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['jobs'] = as_list(self.api.get('/jobs', params={'status': 'open'}))
        return kwargs

    def get_initial(self):
        return {'job': self.request.GET.get('job', '')}

    def form_valid(self, form):
        try:
            self.applicant = self.api.upload('/applicants/manual', form.to_payload(), form.files_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('recruiting:applicant_detail', kwargs={'pk': self.applicant['id']})


class ApplicantDetailView(PortalPermissionMixin, TemplateView):
    """Applicant profile with reviews, notes and interviews."""
    template_name = 'recruiting/applicant_detail.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        pk = self.kwargs['pk']
        applicant = self.api.get(f'/applicants/{pk}')
        reviews = applicant.get('reviews') or []
        user = self.portal_user
        my_review = next(
            (review for review in reviews if str((review.get('reviewer') or {}).get('id')) == user.id),
            None,
        )

        try:
            interviews = as_list(self.api.get(f'/interviews/applicant/{pk}'))
        except ApiError as e:
            logger.info(f"Interviews unavailable for applicant {pk}: {e.message}")
            interviews = []

        context.update({
            'applicant': applicant,
            'reviews': reviews,
            'my_review': my_review,
            'average_rating': average_rating(reviews),
            'notes': applicant.get('notes') or [],
            'interviews': interviews,
            'stage_form': StageForm(initial={'stage': applicant.get('stage')}),
            'note_form': NoteForm(),
            'review_form': kwargs.get('review_form') or ReviewForm(),
            'can_manage': user.can_manage,
        })
        return context


class ApplicantStageView(ManagerRequiredMixin, View):
    """Move an applicant to another stage from the detail page."""

    def post(self, request, pk):
        form = StageForm(request.POST)
        if not form.is_valid():
            messages.error(request, _('Invalid stage.'))
        else:
            try:
                self.api.patch(f'/applicants/{pk}/stage', {'stage': form.cleaned_data['stage']})
                messages.success(request, _('Stage updated.'))
            except ApiError as e:
                messages.error(request, e.message)
        return redirect('recruiting:applicant_detail', pk=pk)


class ApplicantNoteView(PortalPermissionMixin, View):
    """Add a note to an applicant. Blank notes are ignored."""

    def post(self, request, pk):
        form = NoteForm(request.POST)
        if form.is_valid():
            try:
                self.api.post(f'/applicants/{pk}/notes', {'content': form.cleaned_data['content']})
            except ApiError as e:
                messages.error(request, e.message)
        return redirect(reverse('recruiting:applicant_detail', kwargs={'pk': pk}) + '#notes')


class ApplicantReviewView(PortalPermissionMixin, View):
    """Submit the current user's review of an applicant."""

    def post(self, request, pk):
        form = ReviewForm(request.POST)
        if form.is_valid():
            try:
                self.api.post(f'/reviews/applicant/{pk}', form.to_payload())
            except ApiError as e:
                form.add_error(None, e.message)
            else:
                messages.success(request, _('Review submitted.'))
                return redirect('recruiting:applicant_detail', pk=pk)

        view = ApplicantDetailView()
        view.setup(request, pk=pk)
        return view.render_to_response(view.get_context_data(review_form=form))


class RequestReviewView(ManagerRequiredMixin, FormView):
    """Email selected colleagues asking them to review an applicant."""
    form_class = RequestReviewForm
    template_name = 'recruiting/request_review.html'

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['users'] = as_list(self.api.get('/email-settings/users'))
        return kwargs

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['applicant'] = self.api.get(f"/applicants/{self.kwargs['pk']}")
        return context

    def form_valid(self, form):
        try:
            result = self.api.post(f"/email-settings/request-review/{self.kwargs['pk']}", form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        messages.success(self.request, _('Review requested from %(count)d user(s).') % {
            'count': (result or {}).get('notified', len(form.cleaned_data['users'])),
        })
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('recruiting:applicant_detail', kwargs={'pk': self.kwargs['pk']})


# Pipeline Views
def _load_board(api, job_id=None) -> PipelineBoard:
    params = {'spam': 'false'}
    if job_id:
        params['jobId'] = job_id
    return PipelineBoard.from_applicants(as_list(api.get('/applicants', params=params)))


class PipelineView(ManagerRequiredMixin, TemplateView):
    """Kanban board of applicants by stage."""
    template_name = 'recruiting/pipeline.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        job_id = self.request.GET.get('job', '')
        board = _load_board(self.api, job_id)
        context.update({
            'columns': [
                {
                    'stage': code, 'label': label, 'cards': board.columns[code],
                    'droppable': code in MOVABLE_STAGES,
                }
                for code, label in STAGE_CHOICES
            ],
            'jobs': as_list(self.api.get('/jobs', params={'status': 'open'})),
            'job_id': job_id,
        })
        return context


class PipelineMoveView(ManagerRequiredMixin, View):
    """Move a card on the pipeline board via AJAX."""

    def post(self, request):
        if request.content_type == 'application/json':
            try:
                data = json.loads(request.body or b'{}')
            except ValueError:
                return JsonResponse({'error': 'Invalid JSON'}, status=400)
        else:
            data = request.POST

        applicant_id = data.get('applicant_id')
        stage = data.get('stage')
        if not applicant_id or not stage:
            return JsonResponse({'error': 'applicant_id and stage are required'}, status=400)
        if stage not in MOVABLE_STAGES:
            return JsonResponse({'error': f'Applicants cannot be moved to {stage}'}, status=400)

        board = _load_board(self.api, data.get('job'))
        try:
            move = move_applicant(self.api, board, applicant_id, stage)
        except ValueError as e:
            return JsonResponse({'error': str(e)}, status=400)
        except KeyError:
            return JsonResponse({'error': 'Applicant not found'}, status=404)
        except ApiError as e:
            return JsonResponse(
                {'error': e.message, 'counts': board.counts(), 'rolled_back': True},
                status=e.status_code if e.status_code and e.status_code < 500 else 502,
            )

        return JsonResponse({
            'success': True,
            'applicant_id': move.applicant_id,
            'from_stage': move.from_stage,
            'stage': move.to_stage,
            'counts': board.counts(),
        })


# Interview Views
class InterviewCreateView(ManagerRequiredMixin, SuccessMessageMixin, FormView):
    """Schedule an interview for an applicant."""
    form_class = InterviewForm
    template_name = 'recruiting/interview_form.html'
    success_message = _('Interview scheduled.')

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['users'] = as_list(self.api.get('/email-settings/users'))
        return kwargs

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['applicant'] = self.api.get(f"/applicants/{self.kwargs['applicant_pk']}")
        return context

    def form_valid(self, form):
        try:
            self.interview = self.api.post('/interviews', form.to_payload(self.kwargs['applicant_pk']))
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('recruiting:interview_live', kwargs={'pk': self.interview['id']})


class LiveInterviewView(PortalPermissionMixin, TemplateView):
    """Shared interview notes, refreshed on a timer."""
    template_name = 'recruiting/interview_live.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        interview = self.api.get(f"/interviews/{self.kwargs['pk']}")
        user = self.portal_user
        mine = find_participant(interview, user.id)
        applicant = interview.get('applicant') or {}
        context.update({
            'interview': interview,
            'applicant': applicant,
            'others': [p for p in interview.get('participants') or [] if p is not mine],
            'is_participant': mine is not None,
            'feedback_form': kwargs.get('feedback_form') or FeedbackForm(initial={
                'feedback': (mine or {}).get('feedback') or '',
                'rating': (mine or {}).get('rating'),
            }),
            'notes_url_form': NotesUrlForm(initial={'notes_url': interview.get('notesUrl') or ''}),
            'status_choices': INTERVIEW_STATUS_CHOICES,
            'outcome_choices': INTERVIEW_OUTCOME_CHOICES,
            'average_rating': average_rating(applicant.get('reviews')),
            'can_manage': user.can_manage,
        })
        return context


class InterviewRefreshView(PortalPermissionMixin, View):
    """
    JSON state polled by the live interview page.

    The client passes ``unsaved=1`` while the user has edits in progress.
    """

    def get(self, request, pk):
        try:
            interview = self.api.get(f'/interviews/{pk}')
        except ApiError as e:
            return JsonResponse({'error': e.message}, status=e.status_code or 502)
        unsaved = request.GET.get('unsaved') in ('1', 'true')
        return JsonResponse(refresh_payload(interview, self.portal_user.id, unsaved=unsaved))


class InterviewFeedbackView(PortalPermissionMixin, View):
    """Save the current participant's feedback and rating."""

    def post(self, request, pk):
        form = FeedbackForm(request.POST)
        wants_json = request.headers.get('x-requested-with') == 'XMLHttpRequest'

        if not form.is_valid():
            if wants_json:
                return JsonResponse({'error': 'Invalid feedback', 'errors': form.errors}, status=400)
            messages.error(request, _('Invalid feedback.'))
            return redirect('recruiting:interview_live', pk=pk)

        body = feedback_body(form.cleaned_data['feedback'], form.cleaned_data['rating'])
        try:
            self.api.patch(f'/interviews/{pk}/feedback', body)
        except ApiError as e:
            if wants_json:
                return JsonResponse({'error': e.message}, status=e.status_code or 502)
            messages.error(request, _('Failed to save feedback'))
            return redirect('recruiting:interview_live', pk=pk)

        if wants_json:
            return JsonResponse({'success': True, 'saved': body})
        messages.success(request, _('Feedback saved.'))
        return redirect('recruiting:interview_live', pk=pk)


class InterviewUpdateView(ManagerRequiredMixin, View):
    """Update an interview's status, outcome or shared notes URL."""

    FIELDS = {
        'status': (InterviewStatusForm, 'status'),
        'outcome': (InterviewOutcomeForm, 'outcome'),
        'notes_url': (NotesUrlForm, 'notesUrl'),
    }

    def post(self, request, pk):
        field = request.POST.get('field')
        if field not in self.FIELDS:
            messages.error(request, _('Unknown field.'))
            return redirect('recruiting:interview_live', pk=pk)

        form_class, api_name = self.FIELDS[field]
        form = form_class(request.POST)
        if not form.is_valid():
            messages.error(request, _('Invalid value.'))
            return redirect('recruiting:interview_live', pk=pk)

        try:
            self.api.put(f'/interviews/{pk}', {api_name: form.cleaned_data[field] or None})
        except ApiError as e:
            messages.error(request, e.message)
        return redirect('recruiting:interview_live', pk=pk)
