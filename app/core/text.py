"""
Rendering of free-text job and interview content.
"""
import re

from django.utils.html import escape

HTML_TAG_RE = re.compile(r'<(?:p|ul|ol|li|br|strong|em|b|i)\b', re.IGNORECASE)


def is_html(text: str) -> bool:
    """Check if a string already carries formatting tags."""
    return bool(HTML_TAG_RE.search(text))


def format_text_to_html(text: str) -> str:
    """
    Convert plain text with ``- `` prefixed lines into HTML bullet lists.
    Non-bullet lines become paragraphs.
    """
    if not text:
        return ''

    parts = []
    in_list = False

    for line in text.split('\n'):
        trimmed = line.strip()
        if trimmed.startswith('- '):
            if not in_list:
                in_list = True
                parts.append('<ul>')
            parts.append(f'<li>{escape(trimmed[2:])}</li>')
        else:
            if in_list:
                in_list = False
                parts.append('</ul>')
            if trimmed:
                parts.append(f'<p>{escape(trimmed)}</p>')

    if in_list:
        parts.append('</ul>')

    return ''.join(parts)


def render_content(text) -> str:
    """Pass HTML through untouched, convert anything else."""
    if not text:
        return ''
    if is_html(text):
        return text
    return format_text_to_html(text)
