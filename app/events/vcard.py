"""
Prefill data from badge and business-card QR codes.
"""
import re
from dataclasses import dataclass, asdict
from typing import Optional

EMAIL_RE = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')


@dataclass
class VCardData:
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    phone: str = ''
    portfolio_url: str = ''

    def as_dict(self) -> dict:
        return asdict(self)


def _field(raw: str, key: str) -> str:
    """
    Value of the first ``KEY:`` or ``KEY;params:`` line.

    With params the value follows the first colon, except for bare URLs
    whose own colon must be kept.
    """
    match = re.search(rf'^{key}[;:](.*)$', raw, re.IGNORECASE | re.MULTILINE)
    if not match:
        return ''
    value = match.group(1)
    colon = value.find(':')
    if colon >= 0 and not value.startswith('http'):
        return value[colon + 1:].strip()
    return value.strip()


def parse_vcard(raw: str) -> Optional[VCardData]:
    """Parse a vCard payload, or return None when it is not one."""
    if 'BEGIN:VCARD' not in raw:
        return None

    first_name = last_name = ''
    name = _field(raw, 'N')
    if name:
        # N is Last;First;Middle;Prefix;Suffix
        parts = name.split(';')
        last_name = parts[0] if parts else ''
        first_name = parts[1] if len(parts) > 1 else ''

    if not first_name and not last_name:
        full_name = _field(raw, 'FN')
        if full_name:
            parts = full_name.split()
            first_name = parts[0] if parts else ''
            last_name = ' '.join(parts[1:])

    return VCardData(
        first_name=first_name,
        last_name=last_name,
        email=_field(raw, 'EMAIL'),
        phone=_field(raw, 'TEL'),
        portfolio_url=_field(raw, 'URL'),
    )


def extract_email_from_text(text: str) -> str:
    match = EMAIL_RE.search(text or '')
    return match.group(0) if match else ''


def prefill_from_scan(raw: str) -> dict:
    """Form prefill for a scanned code: a vCard, or any text holding an email."""
    card = parse_vcard(raw or '')
    if card is not None:
        return card.as_dict()
    return VCardData(email=extract_email_from_text(raw)).as_dict()
