"""
Tests for applicant source mapping and tracking links.
"""
from urllib.parse import parse_qs, urlparse

import pytest

from core.platforms import get_job_board, get_platform_by_source, platform_color_classes, tracking_url


@pytest.mark.parametrize('source,platform_id', [
    ('LinkedIn', 'linkedin'),
    ('linkedin', 'linkedin'),
    ('LinkedIn Jobs', 'linkedin'),
    ('Handshake', 'handshake'),
    ('AIALA job board', 'aiala'),
    ('AIA Baton Rouge', 'aiabr'),
    ('aia baton rouge newsletter', 'aiabr'),
    ('Direct Application', 'direct'),
    ('Company Website', 'website'),
    ('Employee referral', 'referral'),
])
def test_known_sources(source, platform_id):
    assert get_platform_by_source(source).id == platform_id


def test_unknown_source_keeps_its_name():
    platform = get_platform_by_source('Indeed')

    assert platform.id == 'other'
    assert platform.name == 'Indeed'
    assert platform.color == 'gray'


def test_missing_source():
    assert get_platform_by_source(None).name == 'Unknown'


def test_color_classes_default_to_gray():
    assert platform_color_classes('blue') == 'bg-blue-50 border-blue-200'
    assert platform_color_classes('teal') == 'bg-gray-50 border-gray-200'


def test_tracking_url():
    url = tracking_url(get_job_board('handshake'), 'job-1', 'https://careers.whlc.test/')

    parsed = urlparse(url)
    assert parsed.path == '/apply/job-1/'
    assert parse_qs(parsed.query) == {
        'utm_source': ['handshake'],
        'utm_medium': ['job_board'],
        'utm_campaign': ['university_recruiting'],
        'source': ['Handshake'],
    }


def test_get_job_board():
    assert get_job_board('aiala').external_url.startswith('https://www.aiala.com')
    assert get_job_board('monster') is None
