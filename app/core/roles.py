"""
Portal user and role hierarchy.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from django.utils.translation import gettext_lazy as _

ADMIN = 'admin'
HIRING_MANAGER = 'hiring_manager'
REVIEWER = 'reviewer'

ROLE_CHOICES = [
    (ADMIN, _('Admin')),
    (HIRING_MANAGER, _('Hiring Manager')),
    (REVIEWER, _('Reviewer')),
]

ROLE_HIERARCHY = {
    ADMIN: 3,
    HIRING_MANAGER: 2,
    REVIEWER: 1,
}

ROLE_BADGES = {
    ADMIN: 'bg-gray-900 text-white',
    HIRING_MANAGER: 'bg-blue-100 text-blue-800',
    REVIEWER: 'bg-green-100 text-green-800',
}


def role_label(role: str) -> str:
    return str(dict(ROLE_CHOICES).get(role, role))


def role_badge(role: str) -> str:
    return ROLE_BADGES.get(role, 'bg-gray-100 text-gray-800')


@dataclass
class PortalUser:
    """The signed-in user as reported by ``/auth/me``."""

    id: str
    name: str
    email: str
    role: str
    scoped_departments: Optional[List[str]] = None
    scoped_offices: Optional[List[str]] = None
    scope_mode: str = 'or'
    event_access: bool = True
    offer_access: bool = False
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: dict) -> Optional['PortalUser']:
        if not payload or 'id' not in payload:
            return None
        return cls(
            id=str(payload['id']),
            name=payload.get('name', ''),
            email=payload.get('email', ''),
            role=payload.get('role', REVIEWER),
            scoped_departments=payload.get('scopedDepartments'),
            scoped_offices=payload.get('scopedOffices'),
            scope_mode=payload.get('scopeMode') or 'or',
            event_access=payload.get('eventAccess') is not False,
            offer_access=payload.get('offerAccess') is True,
            raw=payload,
        )

    def has_role(self, required_role: str) -> bool:
        return ROLE_HIERARCHY.get(self.role, 0) >= ROLE_HIERARCHY.get(required_role, 0)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN

    @property
    def can_manage(self) -> bool:
        """Admins and hiring managers create and edit records."""
        return self.role in (ADMIN, HIRING_MANAGER)

    @property
    def can_see_events(self) -> bool:
        return self.role != HIRING_MANAGER or self.event_access
