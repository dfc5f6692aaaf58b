"""
Forms for email and notification settings.
"""
from django import forms
from django.utils.translation import gettext_lazy as _

SUBSCRIPTION_TYPES = ('job', 'department', 'office', 'event')
ALL_VALUE = '*'


class EmailTemplateForm(forms.Form):
    subject = forms.CharField(
        label=_('Subject'), max_length=500,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    body = forms.CharField(
        label=_('Body'), max_length=20000,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 12}),
    )


class SiteContentForm(forms.Form):
    value = forms.CharField(
        label=_('Content'), max_length=50000, required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 12}),
    )


class UserAssignmentForm(forms.Form):
    """Pick the users assigned to a job or event."""

    users = forms.MultipleChoiceField(required=False, widget=forms.CheckboxSelectMultiple)

    def __init__(self, users=(), *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['users'].choices = [
            (str(user['id']), f"{user.get('name', '')} ({user.get('email', '')})") for user in users
        ]

    def to_payload(self) -> dict:
        return {'userIds': self.cleaned_data['users']}


class NotificationSubscriptionsForm(forms.Form):
    """
    Personal notification subscriptions.

    Either everything, or any mix of jobs, departments, offices and events.
    """

    all_notifications = forms.BooleanField(
        label=_('Notify me about everything'), required=False,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'}),
    )
    job = forms.MultipleChoiceField(label=_('Jobs'), required=False, widget=forms.CheckboxSelectMultiple)
    department = forms.MultipleChoiceField(label=_('Departments'), required=False, widget=forms.CheckboxSelectMultiple)
    office = forms.MultipleChoiceField(label=_('Offices'), required=False, widget=forms.CheckboxSelectMultiple)
    event = forms.MultipleChoiceField(label=_('Events'), required=False, widget=forms.CheckboxSelectMultiple)

    def __init__(self, options=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        options = options or {}
        self.fields['job'].choices = [(str(job['id']), job.get('title', '')) for job in options.get('jobs') or []]
        self.fields['department'].choices = [(name, name) for name in options.get('departments') or []]
        self.fields['office'].choices = [
            (str(office['id']), office.get('name', '')) for office in options.get('offices') or []
        ]
        self.fields['event'].choices = [
            (str(event['id']), event.get('name', '')) for event in options.get('events') or []
        ]

    @staticmethod
    def initial_from_subscriptions(subscriptions) -> dict:
        initial = {name: [] for name in SUBSCRIPTION_TYPES}
        initial['all_notifications'] = False
        for sub in subscriptions or []:
            if sub.get('type') == 'all':
                initial['all_notifications'] = True
            elif sub.get('type') in initial:
                initial[sub['type']].append(str(sub.get('value')))
        return initial

    def to_subscriptions(self) -> list:
        data = self.cleaned_data
        if data['all_notifications']:
            return [{'type': 'all', 'value': ALL_VALUE}]
        return [
            {'type': sub_type, 'value': value}
            for sub_type in SUBSCRIPTION_TYPES
            for value in data.get(sub_type) or []
        ]
