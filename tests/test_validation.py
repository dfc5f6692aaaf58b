"""
Tests for email and phone validation.
"""
import pytest
from django.core.exceptions import ValidationError

from core.validation import is_valid_email, is_valid_phone, validate_email_address, validate_phone_number


@pytest.mark.parametrize('value,expected', [
    ('jane@whlc.com', True),
    ('  jane@whlc.com  ', True),
    ('jane@whlc', False),
    ('jane whlc.com', False),
    ('@whlc.com', False),
])
def test_is_valid_email(value, expected):
    assert is_valid_email(value) is expected


@pytest.mark.parametrize('value,expected', [
    ('', True),
    ('(225) 555-0100', True),
    ('+1 225.555.0100', True),
    ('555', False),
    ('call me maybe', False),
])
def test_is_valid_phone(value, expected):
    assert is_valid_phone(value) is expected


def test_validators_raise_with_messages():
    with pytest.raises(ValidationError) as exc_info:
        validate_email_address('nope')
    assert exc_info.value.messages == ['Please enter a valid email address']

    with pytest.raises(ValidationError) as exc_info:
        validate_phone_number('abc')
    assert exc_info.value.messages == ['Please enter a valid phone number']


def test_validators_accept_blank():
    validate_email_address('')
    validate_phone_number('')
