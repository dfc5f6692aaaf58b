"""
Forms for the public careers pages.
"""
from django import forms
from django.utils.translation import gettext_lazy as _

from core.validation import validate_email_address, validate_phone_number
from recruiting.constants import JOB_TYPE_CHOICES

UTM_PARAMS = {
    'utm_source': 'utmSource',
    'utm_medium': 'utmMedium',
    'utm_campaign': 'utmCampaign',
    'utm_content': 'utmContent',
}

DEFAULT_SOURCE = 'Direct Application'


class PublicJobFilterForm(forms.Form):
    department = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': _('Department')}),
    )
    type = forms.ChoiceField(
        required=False,
        choices=[('', _('All types'))] + JOB_TYPE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    location = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': _('Location')}),
    )

    def api_params(self) -> dict:
        if not self.is_valid():
            return {}
        return {key: value for key, value in self.cleaned_data.items() if value}


class ApplyForm(forms.Form):
    """Application for one open job."""

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
        label=_('LinkedIn Profile'), max_length=500, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    website = forms.CharField(
        label=_('Personal Website'), max_length=500, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    portfolio_url = forms.CharField(
        label=_('Portfolio URL'), max_length=500, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    current_company = forms.CharField(
        label=_('Current Company'), max_length=200, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    current_title = forms.CharField(
        label=_('Current Title'), max_length=200, required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    years_experience = forms.IntegerField(
        label=_('Years of Experience'), min_value=0, max_value=60, required=False,
        widget=forms.NumberInput(attrs={'class': 'form-control'}),
    )
    cover_letter = forms.CharField(
        label=_('Cover Letter'), required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 6}),
    )
    resume = forms.FileField(label=_('Resume'), required=False)
    portfolio = forms.FileField(label=_('Portfolio'), required=False)

    def to_payload(self, job_id: str, tracking=None) -> dict:
        """
        Multipart fields for ``POST /applicants``.

        ``tracking`` is the landing page's query string; it supplies the
        ``source`` and any UTM parameters.
        """
        data = self.cleaned_data
        tracking = tracking or {}
        payload = {
            'jobId': job_id,
            'firstName': data['first_name'].strip(),
            'lastName': data['last_name'].strip(),
            'email': data['email'].strip(),
            'phone': data['phone'].strip(),
            'linkedIn': data['linkedin'],
            'website': data['website'],
            'portfolioUrl': data['portfolio_url'],
            'coverLetter': data['cover_letter'],
            'currentCompany': data['current_company'],
            'currentTitle': data['current_title'],
            'yearsExperience': data['years_experience'],
            'source': tracking.get('source') or DEFAULT_SOURCE,
            'referrer': tracking.get('ref', ''),
        }
        for param, api_name in UTM_PARAMS.items():
            payload[api_name] = tracking.get(param, '')
        return payload

    def files_payload(self) -> dict:
        return {
            'resume': self.cleaned_data.get('resume'),
            'portfolio': self.cleaned_data.get('portfolio'),
        }
