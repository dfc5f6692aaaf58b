"""
Choices shared by the recruiting pages.
"""
from django.utils.translation import gettext_lazy as _

# Applicant pipeline stages
STAGE_CHOICES = [
    ('fair_intake', _('Fair Intake')),
    ('new', _('New')),
    ('screening', _('Screening')),
    ('interview', _('Interview')),
    ('offer', _('Offer')),
    ('hired', _('Hired')),
    ('rejected', _('Rejected')),
    ('holding', _('Holding')),
]

STAGE_COLORS = {
    'fair_intake': 'bg-teal-100 text-teal-800',
    'new': 'bg-blue-100 text-blue-800',
    'screening': 'bg-yellow-100 text-yellow-800',
    'interview': 'bg-purple-100 text-purple-800',
    'offer': 'bg-orange-100 text-orange-800',
    'hired': 'bg-green-100 text-green-800',
    'rejected': 'bg-red-100 text-red-800',
    'holding': 'bg-gray-100 text-gray-800',
}

# Stages an applicant can be moved into by a manager
MOVABLE_STAGES = [code for code, label in STAGE_CHOICES if code != 'fair_intake']

JOB_STATUS_CHOICES = [
    ('open', _('Open')),
    ('closed', _('Closed')),
    ('on-hold', _('On Hold')),
]

JOB_STATUS_COLORS = {
    'open': 'bg-green-100 text-green-800',
    'closed': 'bg-gray-100 text-gray-800',
    'on-hold': 'bg-yellow-100 text-yellow-800',
}

JOB_TYPE_CHOICES = [
    ('full-time', _('Full-time')),
    ('part-time', _('Part-time')),
    ('contract', _('Contract')),
    ('internship', _('Internship')),
]

RECOMMENDATION_CHOICES = [
    ('strong_yes', _('Strong Yes')),
    ('yes', _('Yes')),
    ('maybe', _('Maybe')),
    ('no', _('No')),
    ('strong_no', _('Strong No')),
]

RATING_CHOICES = [(value, str(value)) for value in range(1, 6)]

# Optional review sub-scores, API field name first
REVIEW_SCORES = [
    ('technicalSkills', _('Technical Skills')),
    ('designAbility', _('Design Ability')),
    ('portfolioQuality', _('Portfolio Quality')),
    ('communication', _('Communication')),
    ('cultureFit', _('Culture Fit')),
]

INTERVIEW_TYPE_CHOICES = [
    ('in_person', _('In Person')),
    ('video', _('Video')),
    ('phone', _('Phone')),
]

INTERVIEW_STATUS_CHOICES = [
    ('scheduled', _('Scheduled')),
    ('completed', _('Completed')),
    ('cancelled', _('Cancelled')),
    ('no_show', _('No Show')),
]

INTERVIEW_STATUS_COLORS = {
    'scheduled': 'bg-blue-100 text-blue-800',
    'completed': 'bg-green-100 text-green-800',
    'cancelled': 'bg-gray-100 text-gray-500',
    'no_show': 'bg-red-100 text-red-800',
}

INTERVIEW_OUTCOME_CHOICES = [
    ('advance', _('Advance')),
    ('hold', _('Hold')),
    ('reject', _('Reject')),
]


def label_for(choices, value) -> str:
    """Display label for ``value``, falling back to the raw value."""
    return str(dict(choices).get(value, value or ''))
