"""
Email template types and editable site content.
"""
from dataclasses import dataclass
from typing import Tuple

from django.utils.translation import gettext_lazy as _


@dataclass(frozen=True)
class TemplateOption:
    type: str
    label: str
    description: str
    variables: Tuple[str, ...]

    @property
    def placeholders(self):
        return ['{{%s}}' % name for name in self.variables]


TEMPLATE_OPTIONS = (
    TemplateOption(
        'thank_you', _('Thank You Auto-Responder'),
        _('Automatically sent when an applicant submits an application.'),
        ('firstName', 'lastName', 'jobTitle'),
    ),
    TemplateOption(
        'event_thank_you', _('Event Thank You Auto-Responder'),
        _('Automatically sent when an applicant is added via fair intake.'),
        ('firstName', 'lastName', 'eventName'),
    ),
    TemplateOption(
        'review_request', _('Review Request'),
        _('Sent to users when an admin or hiring manager requests their review of an applicant.'),
        ('recipientName', 'applicantName', 'jobTitle', 'senderName', 'applicantUrl'),
    ),
    TemplateOption(
        'rejection', _('Default Rejection Letter'),
        _('Pre-fills the rejection letter when a manager rejects an applicant. Can still be edited at send time.'),
        ('firstName', 'lastName', 'jobTitle'),
    ),
)


@dataclass(frozen=True)
class ContentOption:
    key: str
    label: str
    description: str


SITE_CONTENT_OPTIONS = (
    ContentOption(
        'about_whlc', _('About WHLC'),
        _('Appears on job listing pages and the apply page. Describe the firm, culture, and benefits of working at WHLC.'),
    ),
    ContentOption(
        'positions_intro', _('Positions Intro'),
        _('Appears above the list of available positions on the careers page.'),
    ),
    ContentOption(
        'events_intro', _('Events Intro'),
        _('Appears above the list of upcoming events on the careers page.'),
    ),
)


def get_template_option(template_type: str) -> TemplateOption:
    """The option for ``template_type``, defaulting to the first."""
    for option in TEMPLATE_OPTIONS:
        if option.type == template_type:
            return option
    return TEMPLATE_OPTIONS[0]


def get_content_option(key: str) -> ContentOption:
    for option in SITE_CONTENT_OPTIONS:
        if option.key == key:
            return option
    return SITE_CONTENT_OPTIONS[0]
