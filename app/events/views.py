"""
Views for events app.
"""
import logging

from django.contrib import messages
from django.contrib.messages.views import SuccessMessageMixin
from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.translation import gettext as _
from django.views import View
from django.views.generic import TemplateView, FormView

from core.api import ApiError
from core.mixins import PortalPermissionMixin
from core.pagination import ListQuery, normalize
from core.utils import as_list, average_rating
from core.validation import is_valid_email
from recruiting.constants import STAGE_CHOICES
from .forms import EVENT_TYPE_CHOICES, EventForm, AttendeesForm, FairIntakeForm
from .vcard import prefill_from_scan

logger = logging.getLogger(__name__)

INTAKE_COUNT_KEY = 'intake_count_{}'


class EventAccessMixin(PortalPermissionMixin):
    """Hiring managers need event access granted on their account."""

    def test_func(self):
        if not super().test_func():
            return False
        return self.portal_user.can_see_events


class EventManagerMixin(EventAccessMixin):
    required_role = 'hiring_manager'


class EventListView(EventAccessMixin, TemplateView):
    """List recruitment events."""
    template_name = 'events/event_list.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        query = ListQuery.from_request(self.request, filters=('type',))
        page = normalize(self.api.get('/events', params=query.api_params()), query.page_size, query.page)
        context.update({
            'events': page.data,
            'page': page,
            'query': query,
            'type_choices': EVENT_TYPE_CHOICES,
            'can_manage': self.portal_user.can_manage,
        })
        return context


class EventCreateView(EventManagerMixin, SuccessMessageMixin, FormView):
    """Create new event."""
    form_class = EventForm
    template_name = 'events/event_form.html'
    success_message = _('Event created successfully!')

    def form_valid(self, form):
        try:
            self.event = self.api.post('/events', form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('events:event_detail', kwargs={'pk': self.event['id']})


class EventUpdateView(EventManagerMixin, SuccessMessageMixin, FormView):
    """Update event."""
    form_class = EventForm
    template_name = 'events/event_form.html'
    success_message = _('Event updated successfully!')

    def get_event(self):
        if not hasattr(self, '_event'):
            self._event = self.api.get(f"/events/{self.kwargs['pk']}")
        return self._event

    def get_initial(self):
        return EventForm.initial_from_event(self.get_event())

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['event'] = self.get_event()
        return context

    def form_valid(self, form):
        try:
            self.api.put(f"/events/{self.kwargs['pk']}", form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('events:event_detail', kwargs={'pk': self.kwargs['pk']})


class EventDeleteView(EventManagerMixin, View):

    def post(self, request, pk):
        try:
            self.api.delete(f'/events/{pk}')
        except ApiError as e:
            messages.error(request, e.message)
            return redirect('events:event_detail', pk=pk)
        messages.success(request, _('Event deleted.'))
        return redirect('events:event_list')


class EventDetailView(EventAccessMixin, TemplateView):
    """Event detail with its applicants and the fair intake form."""
    template_name = 'events/event_detail.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        pk = self.kwargs['pk']
        event = self.api.get(f'/events/{pk}')

        query = ListQuery.from_request(self.request, filters=('stage',))
        params = query.api_params()
        params['eventId'] = pk
        page = normalize(self.api.get('/applicants', params=params), query.page_size, query.page)
        for applicant in page.data:
            applicant['average_rating'] = average_rating(applicant.get('reviews'))

        intake_form = kwargs.get('intake_form')
        if intake_form is None:
            jobs = as_list(self.api.get('/jobs', params={'status': 'open'}))
            intake_form = FairIntakeForm(jobs, initial={'job': self.request.GET.get('job', '')})

        context.update({
            'event': event,
            'attendees': event.get('attendees') or [],
            'applicants': page.data,
            'page': page,
            'query': query,
            'stages': STAGE_CHOICES,
            'intake_form': intake_form,
            'intake_count': self.request.session.get(INTAKE_COUNT_KEY.format(pk), 0),
            'can_manage': self.portal_user.can_manage,
        })
        return context


class EventAttendeesView(EventManagerMixin, SuccessMessageMixin, FormView):
    """Choose which staff attend an event."""
    form_class = AttendeesForm
    template_name = 'events/event_attendees.html'
    success_message = _('Attendees updated.')

    def get_event(self):
        if not hasattr(self, '_event'):
            self._event = self.api.get(f"/events/{self.kwargs['pk']}")
        return self._event

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['users'] = as_list(self.api.get('/email-settings/users'))
        return kwargs

    def get_initial(self):
        return {
            'attendees': [str((a.get('user') or {}).get('id')) for a in self.get_event().get('attendees') or []],
        }

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['event'] = self.get_event()
        return context

    def form_valid(self, form):
        try:
            self.api.put(
                f"/events/{self.kwargs['pk']}/attendees",
                {'attendeeIds': form.cleaned_data['attendees']},
            )
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('events:event_detail', kwargs={'pk': self.kwargs['pk']})


class FairIntakeView(EventAccessMixin, View):
    """
    Add an applicant met at the event.

    ``action=another`` returns to a blank form with the same job selected.
    """

    def post(self, request, pk):
        event = self.api.get(f'/events/{pk}')
        jobs = as_list(self.api.get('/jobs', params={'status': 'open'}))
        form = FairIntakeForm(jobs, request.POST, request.FILES)

        if form.is_valid():
            try:
                self.api.upload(
                    f'/events/{pk}/intake',
                    form.to_payload(source=event.get('name', '')),
                    {'resume': form.cleaned_data.get('resume')},
                )
            except ApiError as e:
                form.add_error(None, e.message or _('Failed to add applicant'))
            else:
                key = INTAKE_COUNT_KEY.format(pk)
                request.session[key] = request.session.get(key, 0) + 1
                data = form.cleaned_data
                logger.info(f"Fair intake at event {pk}: {data['email']} by {self.portal_user.email}")

                url = reverse('events:event_detail', kwargs={'pk': pk})
                if request.POST.get('action') == 'another':
                    messages.success(request, _('%(first)s %(last)s added successfully') % {
                        'first': data['first_name'], 'last': data['last_name'],
                    })
                    if data['job']:
                        url += f"?job={data['job']}"
                    return redirect(url + '#intake')
                messages.success(request, _('Applicant added.'))
                return redirect(url)

        view = EventDetailView()
        view.setup(request, pk=pk)
        return view.render_to_response(view.get_context_data(intake_form=form))


class DuplicateCheckView(PortalPermissionMixin, View):
    """Existing applications for an email, checked as the user types."""

    def post(self, request):
        email = request.POST.get('email', '').strip()
        if not email or not is_valid_email(email):
            return JsonResponse({'duplicates': []})
        try:
            duplicates = self.api.post('/applicants/check-duplicates', {'email': email}) or []
        except ApiError as e:
            logger.info(f"Duplicate check failed: {e.message}")
            duplicates = []
        return JsonResponse({'duplicates': duplicates})


class ScanPrefillView(PortalPermissionMixin, View):
    """Turn a scanned QR payload into intake form values."""

    def post(self, request):
        raw = request.POST.get('raw', '')
        if not raw:
            return JsonResponse({'error': 'Nothing scanned'}, status=400)
        return JsonResponse(prefill_from_scan(raw))
