"""
Forms for events app.
"""
from django import forms
from django.utils.translation import gettext_lazy as _

from core.validation import validate_email_address, validate_phone_number
from recruiting.constants import RATING_CHOICES, RECOMMENDATION_CHOICES
from recruiting.forms import job_choices

EVENT_TYPE_CHOICES = [
    ('job_fair', _('Job Fair')),
    ('campus_visit', _('Campus Visit')),
    ('info_session', _('Info Session')),
]

EVENT_TYPE_COLORS = {
    'job_fair': 'bg-blue-100 text-blue-800',
    'campus_visit': 'bg-purple-100 text-purple-800',
    'info_session': 'bg-green-100 text-green-800',
}


class EventForm(forms.Form):
    """Form for creating/editing recruitment events."""

    name = forms.CharField(
        label=_('Event Name'), max_length=300,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    type = forms.ChoiceField(
        label=_('Type'), choices=EVENT_TYPE_CHOICES, initial='job_fair',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    date = forms.DateField(
        label=_('Date'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )
    location = forms.CharField(
        label=_('Location'), max_length=500, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    university = forms.CharField(
        label=_('University'), max_length=300, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    event_url = forms.URLField(
        label=_('Event URL'), max_length=500, required=False,
        widget=forms.URLInput(attrs={'class': 'form-control'}),
    )
    description = forms.CharField(
        label=_('Public description'), required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
    )
    notes = forms.CharField(
        label=_('Internal notes'), max_length=5000, required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )
    publish_to_website = forms.BooleanField(
        label=_('Publish to website'), required=False,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'}),
    )

    @classmethod
    def initial_from_event(cls, event: dict) -> dict:
        return {
            'name': event.get('name', ''),
            'type': event.get('type', 'job_fair'),
            'date': (event.get('date') or '')[:10],
            'location': event.get('location') or '',
            'university': event.get('university') or '',
            'event_url': event.get('eventUrl') or '',
            'description': event.get('description') or '',
            'notes': event.get('notes') or '',
            'publish_to_website': bool(event.get('publishToWebsite')),
        }

    def to_payload(self) -> dict:
        data = self.cleaned_data
        return {
            'name': data['name'],
            'type': data['type'],
            'date': data['date'].isoformat(),
            'location': data['location'] or None,
            'university': data['university'] or None,
            'eventUrl': data['event_url'] or None,
            'description': data['description'] or None,
            'notes': data['notes'] or None,
            'publishToWebsite': data['publish_to_website'],
        }


class AttendeesForm(forms.Form):
    attendees = forms.MultipleChoiceField(
        label=_('Attendees'), required=False,
        widget=forms.CheckboxSelectMultiple,
    )

    def __init__(self, users=(), *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['attendees'].choices = [
            (str(user['id']), f"{user.get('name', '')} ({user.get('email', '')})") for user in users
        ]


class FairIntakeForm(forms.Form):
    """Rapid entry of an applicant met at a recruiting event."""

    first_name = forms.CharField(
        label=_('First Name'), max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control', 'autofocus': True}),
    )
    last_name = forms.CharField(
        label=_('Last Name'), max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    email = forms.CharField(
        label=_('Email'), validators=[validate_email_address],
        widget=forms.EmailInput(attrs={'class': 'form-control'}),
    )
    phone = forms.CharField(
        label=_('Phone'), max_length=50, required=False, validators=[validate_phone_number],
        widget=forms.TextInput(attrs={'class': 'form-control', 'type': 'tel'}),
    )
    portfolio_url = forms.CharField(
        label=_('Portfolio URL'), max_length=500, required=False,
        widget=forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://...'}),
    )
    job = forms.ChoiceField(
        label=_('Job Position'), required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    rating = forms.TypedChoiceField(
        label=_('Rating'), choices=RATING_CHOICES, coerce=int,
        widget=forms.RadioSelect,
    )
    recommendation = forms.ChoiceField(
        label=_('Recommendation'), required=False,
        choices=[('', '-')] + RECOMMENDATION_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    comments = forms.CharField(
        label=_('Comments'), max_length=5000, required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )
    resume = forms.FileField(label=_('Resume'), required=False)

    def __init__(self, jobs=(), *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['job'].choices = job_choices(jobs, blank_label=_('General Interest'))

    def clean(self):
        cleaned_data = super().clean()
        required = ('first_name', 'last_name', 'email', 'rating')
        if not all((self.data.get(self.add_prefix(name)) or '').strip() for name in required):
            self.add_error(None, _('First name, last name, email, and rating are required'))
        return cleaned_data

    def to_payload(self, source: str) -> dict:
        data = self.cleaned_data
        return {
            'firstName': data['first_name'].strip(),
            'lastName': data['last_name'].strip(),
            'email': data['email'].strip(),
            'phone': data['phone'].strip(),
            'portfolioUrl': data['portfolio_url'].strip(),
            'jobId': data['job'],
            'rating': str(data['rating']),
            'recommendation': data['recommendation'],
            'comments': data['comments'],
            'source': source,
        }
