"""
Field validation shared by every applicant-entry form.
"""
import re

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_RE = re.compile(r'^[+]?[\d\s()./-]{7,20}$')


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value.strip()))


def is_valid_phone(value: str) -> bool:
    if not value.strip():
        return True  # phone is optional
    return bool(PHONE_RE.match(value.strip()))


def validate_email_address(value):
    if value and not is_valid_email(value):
        raise ValidationError(_('Please enter a valid email address'), code='invalid_email')


def validate_phone_number(value):
    if value and not is_valid_phone(value):
        raise ValidationError(_('Please enter a valid phone number'), code='invalid_phone')
