"""
Template tags for the applicant-tracking portal.
"""
from django import template
from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe

from core import avatars
from core.platforms import get_platform_by_source, platform_color_classes, platform_text_color_classes
from core.roles import role_badge, role_label
from core.text import render_content as _render_content
from core.utils import parse_api_datetime, relative_time
from events.forms import EVENT_TYPE_CHOICES, EVENT_TYPE_COLORS
from recruiting import constants

register = template.Library()


def _avatar_shapes(variant, size):
    """Foreground shapes for each avatar style."""
    h = avatars.hash_code(variant.seed)
    fg = variant.foreground
    accent = variant.colors[(h // 25) % len(variant.colors)]
    half = size / 2

    if variant.style == 'marble':
        return format_html(
            '<circle cx="{}" cy="{}" r="{}" fill="{}" opacity="0.8"/>'
            '<circle cx="{}" cy="{}" r="{}" fill="{}" opacity="0.6"/>',
            size * 0.3, size * 0.7, size * 0.45, fg,
            size * 0.75, size * 0.3, size * 0.35, accent,
        )
    if variant.style == 'pixel':
        cell = size / 4
        cells = []
        for index in range(16):
            if (h >> index) & 1:
                cells.append((cell * (index % 4), cell * (index // 4), cell, cell, fg))
        return format_html_join(
            '', '<rect x="{}" y="{}" width="{}" height="{}" fill="{}"/>', cells,
        )
    if variant.style == 'sunset':
        return format_html(
            '<rect x="0" y="{}" width="{}" height="{}" fill="{}"/>',
            half, size, half, fg,
        )
    if variant.style == 'ring':
        return format_html(
            '<circle cx="{0}" cy="{0}" r="{1}" fill="none" stroke="{2}" stroke-width="{3}"/>'
            '<circle cx="{0}" cy="{0}" r="{4}" fill="{5}"/>',
            half, size * 0.35, fg, size * 0.12, size * 0.15, accent,
        )
    # bauhaus
    return format_html(
        '<rect x="{}" y="{}" width="{}" height="{}" fill="{}" transform="rotate({} {} {})"/>'
        '<circle cx="{}" cy="{}" r="{}" fill="{}"/>',
        size * 0.1, size * 0.45, size * 0.8, size * 0.2, fg, h % 360, half, half,
        size * 0.65, size * 0.35, size * 0.18, accent,
    )


@register.simple_tag
def avatar(name, email=None, size=40):
    """Inline SVG avatar seeded by email, or by name when there is no email."""
    size = int(size)
    variant = avatars.pick_variant(name or '', email)
    mask_id = f'avatar-mask-{avatars.hash_code(variant.seed)}-{size}'
    return format_html(
        '<svg class="avatar avatar-{}" width="{}" height="{}" viewBox="0 0 {} {}" '
        'role="img" aria-label="{}"><title>{}</title>'
        '<mask id="{}"><circle cx="{}" cy="{}" r="{}" fill="#fff"/></mask>'
        '<g mask="url(#{})"><rect width="{}" height="{}" fill="{}"/>{}</g></svg>',
        variant.style, size, size, size, size,
        name or '', name or '',
        mask_id, size / 2, size / 2, size / 2,
        mask_id, size, size, variant.background,
        _avatar_shapes(variant, size),
    )


@register.filter
def render_content(text):
    """Render stored job or interview text as HTML."""
    return mark_safe(_render_content(text))


@register.filter
def stage_label(stage):
    return constants.label_for(constants.STAGE_CHOICES, stage)


@register.filter
def stage_color(stage):
    return constants.STAGE_COLORS.get(stage, 'bg-gray-100 text-gray-800')


@register.filter
def job_status_label(status):
    return constants.label_for(constants.JOB_STATUS_CHOICES, status)


@register.filter
def job_status_color(status):
    return constants.JOB_STATUS_COLORS.get(status, 'bg-gray-100 text-gray-800')


@register.filter
def job_type_label(job_type):
    return constants.label_for(constants.JOB_TYPE_CHOICES, job_type)


@register.filter
def recommendation_label(value):
    return constants.label_for(constants.RECOMMENDATION_CHOICES, value)


@register.filter
def interview_type_label(value):
    return constants.label_for(constants.INTERVIEW_TYPE_CHOICES, value)


@register.filter
def interview_status_label(value):
    return constants.label_for(constants.INTERVIEW_STATUS_CHOICES, value)


@register.filter
def interview_status_color(value):
    return constants.INTERVIEW_STATUS_COLORS.get(value, 'bg-gray-100 text-gray-800')


@register.filter
def event_type_label(value):
    return constants.label_for(EVENT_TYPE_CHOICES, value)


@register.filter
def event_type_color(value):
    return EVENT_TYPE_COLORS.get(value, 'bg-gray-100 text-gray-800')


@register.filter
def role_name(role):
    return role_label(role)


@register.filter
def role_color(role):
    return role_badge(role)


@register.filter
def platform(source):
    return get_platform_by_source(source)


@register.filter
def platform_card(color):
    return platform_color_classes(color)


@register.filter
def platform_text(color):
    return platform_text_color_classes(color)


@register.filter
def api_datetime(value):
    """Turn an API timestamp into a datetime so ``|date`` can format it."""
    return parse_api_datetime(value)


@register.filter
def time_ago(value):
    return relative_time(value)


@register.filter
def get_item(mapping, key):
    if not mapping:
        return None
    return mapping.get(key)


@register.simple_tag
def sort_header(query, field_name, label):
    """Clickable column header that toggles sort direction."""
    return format_html(
        '<a href="{}" class="sortable-header{}">{} <span class="sort-indicator">{}</span></a>',
        query.sort_link(field_name),
        ' active' if query.sort == field_name else '',
        label,
        query.sort_indicator(field_name),
    )


@register.inclusion_tag('partials/pagination.html')
def pagination(page, query):
    """Page links for a PaginatedResponse using the list's URL state."""
    start, end = page.range_label
    return {
        'page': page,
        'links': [
            {'number': number, 'url': query.page_link(number) if number != '...' else None}
            for number in page.window
        ],
        'previous_url': query.page_link(page.page - 1) if page.has_previous else None,
        'next_url': query.page_link(page.page + 1) if page.has_next else None,
        'start': start,
        'end': end,
    }
