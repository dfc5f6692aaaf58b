"""
Forms for office and user management.
"""
import re

from django import forms
from django.utils.translation import gettext_lazy as _

from core.roles import ROLE_CHOICES, HIRING_MANAGER
from core.validation import validate_email_address

SCOPE_MODE_CHOICES = [
    ('or', _('Any of the selected (OR)')),
    ('and', _('All of the selected (AND)')),
]


class OfficeForm(forms.Form):
    """Form for creating/updating offices."""

    name = forms.CharField(label=_('Name'), max_length=200, widget=forms.TextInput(attrs={'class': 'form-control'}))
    address = forms.CharField(label=_('Address'), max_length=500, widget=forms.TextInput(attrs={'class': 'form-control'}))
    city = forms.CharField(label=_('City'), max_length=200, widget=forms.TextInput(attrs={'class': 'form-control'}))
    state = forms.CharField(label=_('State'), max_length=100, widget=forms.TextInput(attrs={'class': 'form-control'}))
    zip = forms.CharField(label=_('ZIP'), max_length=20, widget=forms.TextInput(attrs={'class': 'form-control'}))
    phone = forms.CharField(label=_('Phone'), max_length=50, widget=forms.TextInput(attrs={'class': 'form-control'}))

    FIELDS = ('name', 'address', 'city', 'state', 'zip', 'phone')

    @classmethod
    def initial_from_office(cls, office: dict) -> dict:
        return {name: office.get(name, '') for name in cls.FIELDS}

    def to_payload(self) -> dict:
        return {name: self.cleaned_data[name].strip() for name in self.FIELDS}


class UserSearchForm(forms.Form):
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': _('Search by name or email...')}),
    )
    role = forms.ChoiceField(
        required=False, choices=[('', _('All roles'))] + ROLE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )


class UserForm(forms.Form):
    """
    Create or edit a portal user.

    Only hiring managers carry a department/office scope and event/offer
    access flags; every other role is saved as global with default access.
    """

    name = forms.CharField(label=_('Name'), max_length=200, widget=forms.TextInput(attrs={'class': 'form-control'}))
    email = forms.CharField(
        label=_('Email'), validators=[validate_email_address],
        widget=forms.EmailInput(attrs={'class': 'form-control'}),
    )
    password = forms.CharField(
        label=_('Password'), required=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'autocomplete': 'new-password'}),
    )
    role = forms.ChoiceField(
        label=_('Role'), choices=ROLE_CHOICES, initial='reviewer',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    scope_global = forms.BooleanField(
        label=_('All departments and offices'), required=False, initial=True,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'}),
    )
    scoped_departments = forms.MultipleChoiceField(
        label=_('Departments'), required=False, widget=forms.CheckboxSelectMultiple,
    )
    scoped_offices = forms.MultipleChoiceField(
        label=_('Offices'), required=False, widget=forms.CheckboxSelectMultiple,
    )
    scope_mode = forms.ChoiceField(
        label=_('Scope mode'), choices=SCOPE_MODE_CHOICES, initial='or',
        widget=forms.RadioSelect,
    )
    event_access = forms.BooleanField(
        label=_('Can access events'), required=False, initial=True,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'}),
    )
    offer_access = forms.BooleanField(
        label=_('Can access offers'), required=False, initial=False,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'}),
    )

    def __init__(self, departments=(), offices=(), *args, editing=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.editing = editing
        self.fields['scoped_departments'].choices = [(name, name) for name in departments]
        self.fields['scoped_offices'].choices = [
            (str(office['id']), office.get('name', '')) for office in offices
        ]
        if editing:
            self.fields['password'].help_text = _('Leave blank to keep the current password')

    @classmethod
    def initial_from_user(cls, user: dict) -> dict:
        departments = user.get('scopedDepartments')
        offices = user.get('scopedOffices')
        return {
            'name': user.get('name', ''),
            'email': user.get('email', ''),
            'role': user.get('role', 'reviewer'),
            'scope_global': not departments and not offices,
            'scoped_departments': departments or [],
            'scoped_offices': offices or [],
            'scope_mode': user.get('scopeMode') or 'or',
            'event_access': user.get('eventAccess') is not False,
            'offer_access': user.get('offerAccess') is True,
        }

    def clean_password(self):
        password = self.cleaned_data['password']
        if not password:
            if not self.editing:
                raise forms.ValidationError(_('Password is required for new users'))
            return password
        if len(password) < 8:
            raise forms.ValidationError(_('Password must be at least 8 characters'))
        if not re.search(r'[A-Z]', password):
            raise forms.ValidationError(_('Password must contain at least 1 uppercase letter'))
        if not re.search(r'[a-z]', password):
            raise forms.ValidationError(_('Password must contain at least 1 lowercase letter'))
        if not re.search(r'[0-9]', password):
            raise forms.ValidationError(_('Password must contain at least 1 number'))
        return password

    def to_payload(self) -> dict:
        data = self.cleaned_data
        payload = {
            'name': data['name'].strip(),
            'email': data['email'].strip(),
            'role': data['role'],
        }
        payload.update(scope_fields(data))
        if data['password']:
            payload['password'] = data['password']
        return payload


def scope_fields(data: dict) -> dict:
    """Scope and access fields for the API given the cleaned form data."""
    is_manager = data.get('role') == HIRING_MANAGER
    if is_manager and not data.get('scope_global'):
        fields = {
            'scopedDepartments': list(data.get('scoped_departments') or []),
            'scopedOffices': list(data.get('scoped_offices') or []),
            'scopeMode': data.get('scope_mode') or 'or',
        }
    else:
        fields = {'scopedDepartments': None, 'scopedOffices': None, 'scopeMode': 'or'}

    if is_manager:
        fields['eventAccess'] = bool(data.get('event_access'))
        fields['offerAccess'] = bool(data.get('offer_access'))
    else:
        fields['eventAccess'] = True
        fields['offerAccess'] = False
    return fields
