"""
Forms for recruiting app.
"""
from django import forms
from django.utils.translation import gettext_lazy as _

from core.validation import validate_email_address, validate_phone_number
from .constants import (
    JOB_STATUS_CHOICES, JOB_TYPE_CHOICES, STAGE_CHOICES, MOVABLE_STAGES,
    RECOMMENDATION_CHOICES, RATING_CHOICES, REVIEW_SCORES,
    INTERVIEW_TYPE_CHOICES, INTERVIEW_STATUS_CHOICES, INTERVIEW_OUTCOME_CHOICES,
)


def _blank_choice(label):
    return [('', label)]


def office_choices(offices):
    return _blank_choice(_('No office')) + [
        (str(office['id']), f"{office['name']} ({office.get('city', '')}, {office.get('state', '')})")
        for office in offices
    ]


def job_choices(jobs, blank_label=_('General application (no job)')):
    return _blank_choice(blank_label) + [
        (str(job['id']), f"{job['title']} - {job.get('department', '')}") for job in jobs
    ]


class JobForm(forms.Form):
    """Form for creating/editing jobs."""

    title = forms.CharField(
        label=_('Job Title'), max_length=300,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    slug = forms.SlugField(
        label=_('URL Slug'), max_length=300, required=False,
        help_text=_('Leave blank to generate from the title'),
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    department = forms.CharField(
        label=_('Department'), max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    location = forms.CharField(
        label=_('Location'), max_length=300, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    office = forms.ChoiceField(
        label=_('Office'), required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    type = forms.ChoiceField(
        label=_('Type'), choices=JOB_TYPE_CHOICES, initial='full-time',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    status = forms.ChoiceField(
        label=_('Status'), choices=JOB_STATUS_CHOICES, initial='open',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    salary = forms.CharField(
        label=_('Salary'), max_length=200, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    description = forms.CharField(
        label=_('Description'),
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 6}),
    )
    responsibilities = forms.CharField(
        label=_('Responsibilities'), required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
    )
    requirements = forms.CharField(
        label=_('Requirements'),
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
    )
    benefits = forms.CharField(
        label=_('Benefits'), required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )
    publish_to_website = forms.BooleanField(
        label=_('Publish to website'), required=False,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'}),
    )

    def __init__(self, offices=(), *args, editing=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.editing = editing
        self.fields['office'].choices = office_choices(offices)
        if not editing:
            # New jobs always open; status is changed from the job page.
            del self.fields['status']

    @classmethod
    def initial_from_job(cls, job: dict) -> dict:
        office = job.get('office') or {}
        return {
            'title': job.get('title', ''),
            'slug': job.get('slug', ''),
            'department': job.get('department', ''),
            'location': job.get('location', ''),
            'office': str(office.get('id', job.get('officeId') or '')),
            'type': job.get('type', 'full-time'),
            'status': job.get('status', 'open'),
            'salary': job.get('salary') or '',
            'description': job.get('description', ''),
            'responsibilities': job.get('responsibilities') or '',
            'requirements': job.get('requirements', ''),
            'benefits': job.get('benefits') or '',
            'publish_to_website': bool(job.get('publishToWebsite')),
        }

    def to_payload(self) -> dict:
        data = self.cleaned_data
        payload = {
            'title': data['title'],
            'department': data['department'],
            'location': data['location'],
            'type': data['type'],
            'salary': data['salary'] or None,
            'description': data['description'],
            'responsibilities': data['responsibilities'] or None,
            'requirements': data['requirements'],
            'benefits': data['benefits'] or None,
            'publishToWebsite': data['publish_to_website'],
            'officeId': data['office'] or None,
        }
        if data.get('slug'):
            payload['slug'] = data['slug']
        if self.editing:
            payload['status'] = data['status']
        return payload


class JobStatusForm(forms.Form):
    status = forms.ChoiceField(choices=JOB_STATUS_CHOICES)


class PlatformStatusForm(forms.Form):
    """Mark a job as posted (or not) on an external job board."""

    platform_id = forms.CharField(max_length=50)
    posted = forms.BooleanField(required=False)
    post_url = forms.URLField(
        label=_('Post URL'), max_length=500, required=False,
        widget=forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://'}),
    )

    def to_payload(self) -> dict:
        return {
            'platformId': self.cleaned_data['platform_id'],
            'posted': self.cleaned_data['posted'],
            'postUrl': self.cleaned_data['post_url'] or None,
        }


class LinkedInStatusForm(forms.Form):
    posted = forms.BooleanField(required=False)
    post_url = forms.URLField(
        label=_('LinkedIn post URL'), max_length=500, required=False,
        widget=forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://www.linkedin.com/'}),
    )

    def to_payload(self) -> dict:
        return {
            'posted': self.cleaned_data['posted'],
            'postUrl': self.cleaned_data['post_url'] or None,
        }


class ApplicantSearchForm(forms.Form):
    """Search and stage filter for the applicant list."""

    search = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': _('Search by name or email...')}),
    )
    stage = forms.ChoiceField(
        required=False,
        choices=_blank_choice(_('All stages')) + STAGE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )


class ApplicantForm(forms.Form):
    """Manually add an applicant with optional resume and portfolio files."""

    job = forms.ChoiceField(
        label=_('Job'), required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    first_name = forms.CharField(
        label=_('First Name'), max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
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
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    linkedin = forms.CharField(
        label=_('LinkedIn'), max_length=500, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    website = forms.CharField(
        label=_('Website'), max_length=500, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    portfolio_url = forms.CharField(
        label=_('Portfolio URL'), max_length=500, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    source = forms.CharField(
        label=_('Source'), max_length=200, required=False, initial='manual',
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    resume = forms.FileField(label=_('Resume'), required=False)
    portfolio = forms.FileField(label=_('Portfolio'), required=False)

    def __init__(self, jobs=(), *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['job'].choices = job_choices(jobs)

    def to_payload(self) -> dict:
        data = self.cleaned_data
        return {
            'jobId': data['job'],
            'firstName': data['first_name'].strip(),
            'lastName': data['last_name'].strip(),
            'email': data['email'].strip(),
            'phone': data['phone'].strip(),
            'linkedIn': data['linkedin'],
            'website': data['website'],
            'portfolioUrl': data['portfolio_url'],
            'source': data['source'] or 'manual',
        }

    def files_payload(self) -> dict:
        return {
            'resume': self.cleaned_data.get('resume'),
            'portfolio': self.cleaned_data.get('portfolio'),
        }


class StageForm(forms.Form):
    stage = forms.ChoiceField(
        choices=[(code, label) for code, label in STAGE_CHOICES if code in MOVABLE_STAGES],
        widget=forms.Select(attrs={'class': 'form-select'}),
    )


class NoteForm(forms.Form):
    content = forms.CharField(
        label=_('Note'), max_length=5000,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3, 'placeholder': _('Add a note...')}),
    )

    def clean_content(self):
        content = self.cleaned_data['content'].strip()
        if not content:
            raise forms.ValidationError(_('Note content is required'))
        return content


class ReviewForm(forms.Form):
    """Reviewer scorecard for an applicant."""

    rating = forms.TypedChoiceField(
        label=_('Overall Rating'), choices=RATING_CHOICES, coerce=int,
        widget=forms.RadioSelect,
    )
    recommendation = forms.ChoiceField(
        label=_('Recommendation'), required=False,
        choices=_blank_choice(_('No recommendation')) + RECOMMENDATION_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    comments = forms.CharField(
        label=_('Comments'), max_length=5000, required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field_name, label in REVIEW_SCORES:
            self.fields[field_name] = forms.TypedChoiceField(
                label=label, required=False, coerce=int, empty_value=None,
                choices=_blank_choice('-') + RATING_CHOICES,
                widget=forms.Select(attrs={'class': 'form-select'}),
            )

    def score_fields(self):
        return [self[field_name] for field_name, label in REVIEW_SCORES]

    def to_payload(self) -> dict:
        data = self.cleaned_data
        payload = {
            'rating': data['rating'],
            'recommendation': data['recommendation'] or None,
            'comments': data['comments'] or None,
        }
        for field_name, label in REVIEW_SCORES:
            payload[field_name] = data.get(field_name)
        return payload


class InterviewForm(forms.Form):
    """Schedule an interview with one or more participants."""

    scheduled_at = forms.DateTimeField(
        label=_('Date & Time'),
        input_formats=['%Y-%m-%dT%H:%M', '%Y-%m-%d %H:%M', '%Y-%m-%dT%H:%M:%S'],
        widget=forms.DateTimeInput(attrs={'class': 'form-control', 'type': 'datetime-local'}),
    )
    type = forms.ChoiceField(
        label=_('Type'), choices=INTERVIEW_TYPE_CHOICES, initial='in_person',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    location = forms.CharField(
        label=_('Location or meeting link'), max_length=500, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    notes = forms.CharField(
        label=_('Notes'), max_length=5000, required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )
    participants = forms.MultipleChoiceField(
        label=_('Participants'),
        widget=forms.CheckboxSelectMultiple,
        error_messages={'required': _('At least one participant is required')},
    )

    def __init__(self, users=(), *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['participants'].choices = [
            (str(user['id']), user.get('name') or user.get('email', '')) for user in users
        ]

    def to_payload(self, applicant_id: str) -> dict:
        data = self.cleaned_data
        return {
            'applicantId': applicant_id,
            'scheduledAt': data['scheduled_at'].isoformat(),
            'location': data['location'] or None,
            'type': data['type'],
            'notes': data['notes'] or None,
            'participantIds': data['participants'],
        }


class InterviewStatusForm(forms.Form):
    status = forms.ChoiceField(choices=INTERVIEW_STATUS_CHOICES)


class InterviewOutcomeForm(forms.Form):
    outcome = forms.ChoiceField(
        required=False, choices=_blank_choice(_('Not decided')) + INTERVIEW_OUTCOME_CHOICES,
    )


class NotesUrlForm(forms.Form):
    notes_url = forms.URLField(
        label=_('Shared notes URL'), max_length=500, required=False,
        widget=forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://docs.google.com/...'}),
    )


class FeedbackForm(forms.Form):
    """A participant's own interview feedback."""

    feedback = forms.CharField(
        label=_('Your feedback'), max_length=5000, required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 8}),
    )
    rating = forms.TypedChoiceField(
        label=_('Your rating'), required=False, coerce=int, empty_value=None,
        choices=_blank_choice('-') + RATING_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )


class RequestReviewForm(forms.Form):
    """Ask colleagues to review an applicant by email."""

    users = forms.MultipleChoiceField(
        label=_('Send to'),
        widget=forms.CheckboxSelectMultiple,
        error_messages={'required': _('At least one user must be selected')},
    )
    message = forms.CharField(
        label=_('Message'), max_length=2000, required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )

    def __init__(self, users=(), *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['users'].choices = [
            (str(user['id']), user.get('name') or user.get('email', '')) for user in users
        ]

    def to_payload(self) -> dict:
        return {
            'userIds': self.cleaned_data['users'],
            'message': self.cleaned_data['message'],
        }
