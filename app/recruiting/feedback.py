"""
Shared interview notes.

Every participant edits their own feedback while the page refreshes everyone
else's on a timer. A refresh requested while the participant has unsaved
edits leaves their own feedback out so the browser keeps what they typed.
"""
from typing import Optional

from core.text import render_content


def find_participant(interview: dict, user_id: str) -> Optional[dict]:
    for participant in interview.get('participants') or []:
        user = participant.get('user') or {}
        if str(user.get('id', participant.get('userId'))) == str(user_id):
            return participant
    return None


def _participant_payload(participant: dict) -> dict:
    user = participant.get('user') or {}
    return {
        'id': participant.get('id'),
        'user': {'id': user.get('id'), 'name': user.get('name', ''), 'email': user.get('email', '')},
        'feedback_html': render_content(participant.get('feedback')),
        'rating': participant.get('rating'),
    }


def refresh_payload(interview: dict, user_id: str, unsaved: bool = False) -> dict:
    """
    Build the poll response for the live interview page.

    ``mine`` carries the current user's own feedback and rating; it is
    omitted when ``unsaved`` is set.
    """
    others = []
    mine = None
    for participant in interview.get('participants') or []:
        user = participant.get('user') or {}
        if str(user.get('id', participant.get('userId'))) == str(user_id):
            mine = participant
        else:
            others.append(_participant_payload(participant))

    payload = {
        'id': interview.get('id'),
        'status': interview.get('status'),
        'outcome': interview.get('outcome'),
        'notes_url': interview.get('notesUrl'),
        'participants': others,
        'is_participant': mine is not None,
    }
    if mine is not None and not unsaved:
        payload['mine'] = {
            'feedback': mine.get('feedback') or '',
            'rating': mine.get('rating'),
        }
    return payload


def feedback_body(feedback: str, rating) -> dict:
    """Request body for saving a participant's feedback."""
    return {
        'feedback': feedback or None,
        'rating': int(rating) if rating not in (None, '') else None,
    }
