"""
Applicant sources and job-board tracking links.
"""
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode


@dataclass(frozen=True)
class Platform:
    id: str
    name: str
    color: str


PLATFORMS = (
    Platform('website', 'Website', 'gray'),
    Platform('linkedin', 'LinkedIn', 'blue'),
    Platform('handshake', 'Handshake', 'green'),
    Platform('aiala', 'AIALA', 'purple'),
    Platform('aiabr', 'AIA Baton Rouge', 'orange'),
    Platform('direct', 'Direct Application', 'gray'),
    Platform('referral', 'Referral', 'indigo'),
)

_BY_ID = {platform.id: platform for platform in PLATFORMS}

# Checked in order; the first keyword set fully contained in the source wins.
_PARTIAL_MATCHES = (
    (('linkedin',), 'linkedin'),
    (('handshake',), 'handshake'),
    (('aiala',), 'aiala'),
    (('aia', 'baton'), 'aiabr'),
    (('website',), 'website'),
    (('direct',), 'direct'),
    (('referral',), 'referral'),
)


def get_platform_by_source(source: Optional[str]) -> Platform:
    """Map a free-text applicant source to a known platform."""
    normalized = (source or '').lower().strip()

    for platform in PLATFORMS:
        if platform.name.lower() == normalized or platform.id == normalized:
            return platform

    for keywords, platform_id in _PARTIAL_MATCHES:
        if all(keyword in normalized for keyword in keywords):
            return _BY_ID[platform_id]

    return Platform('other', source or 'Unknown', 'gray')


PLATFORM_CARD_CLASSES = {
    'blue': 'bg-blue-50 border-blue-200',
    'green': 'bg-green-50 border-green-200',
    'purple': 'bg-purple-50 border-purple-200',
    'orange': 'bg-orange-50 border-orange-200',
    'gray': 'bg-gray-50 border-gray-200',
    'indigo': 'bg-indigo-50 border-indigo-200',
}

PLATFORM_TEXT_CLASSES = {
    'blue': 'text-blue-900',
    'green': 'text-green-900',
    'purple': 'text-purple-900',
    'orange': 'text-orange-900',
    'gray': 'text-gray-900',
    'indigo': 'text-indigo-900',
}


def platform_color_classes(color: str) -> str:
    return PLATFORM_CARD_CLASSES.get(color, 'bg-gray-50 border-gray-200')


def platform_text_color_classes(color: str) -> str:
    return PLATFORM_TEXT_CLASSES.get(color, 'text-gray-900')


@dataclass(frozen=True)
class JobBoardPlatform:
    id: str
    name: str
    description: str
    utm_source: str
    utm_medium: str
    utm_campaign: str
    color: str
    external_url: Optional[str] = None


JOB_BOARD_PLATFORMS = (
    JobBoardPlatform(
        'linkedin', 'LinkedIn', 'Professional social network',
        'linkedin', 'social', 'linkedin_post', 'blue',
    ),
    JobBoardPlatform(
        'handshake', 'Handshake', 'University recruiting platform',
        'handshake', 'job_board', 'university_recruiting', 'green',
    ),
    JobBoardPlatform(
        'aiala', 'AIALA', 'American Institute of Architects Louisiana',
        'aiala', 'job_board', 'aiala_listing', 'purple',
        external_url='https://www.aiala.com/products/online-job-board-listing',
    ),
    JobBoardPlatform(
        'aiabr', 'AIA Baton Rouge', 'AIA Baton Rouge job board',
        'aiabr', 'job_board', 'aiabr_listing', 'orange',
        external_url='https://www.aiabr.com/new-page',
    ),
)


def get_job_board(platform_id: str) -> Optional[JobBoardPlatform]:
    for platform in JOB_BOARD_PLATFORMS:
        if platform.id == platform_id:
            return platform
    return None


def tracking_url(platform: JobBoardPlatform, job_id: str, base_url: str) -> str:
    """Public apply URL tagged so the applicant's source can be attributed."""
    params = urlencode({
        'utm_source': platform.utm_source,
        'utm_medium': platform.utm_medium,
        'utm_campaign': platform.utm_campaign,
        'source': platform.name,
    })
    return f"{base_url.rstrip('/')}/apply/{job_id}/?{params}"
