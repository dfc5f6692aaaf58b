"""
Mixins for role-based access to portal pages.
"""
from django.core.exceptions import PermissionDenied
from django.http import Http404

from .api import ApiError
from .middleware import get_portal_user
from .roles import REVIEWER


class PortalPermissionMixin:
    """
    Mixin to check that the signed-in user holds at least ``required_role``.
    """

    required_role = REVIEWER

    @property
    def api(self):
        return self.request.api

    @property
    def portal_user(self):
        return get_portal_user(self.request)

    def test_func(self) -> bool:
        user = self.portal_user
        if user is None:
            return False
        return user.has_role(self.required_role)

    def dispatch(self, request, *args, **kwargs):
        if not self.test_func():
            return self.handle_no_permission()
        try:
            return super().dispatch(request, *args, **kwargs)
        except ApiError as e:
            return self.handle_api_error(e)

    def handle_no_permission(self):
        """Handle cases where user doesn't have permission."""
        if self.portal_user is None:
            raise PermissionDenied("Sign in to access the applicant tracking portal.")
        raise PermissionDenied("You don't have permission to access this resource.")

    def handle_api_error(self, error: ApiError):
        """Map API failures that escaped the view onto HTTP errors."""
        if error.is_not_found:
            raise Http404(error.message)
        if error.is_forbidden:
            raise PermissionDenied(error.message)
        raise error


class ManagerRequiredMixin(PortalPermissionMixin):
    """Admins and hiring managers only."""
    required_role = 'hiring_manager'


class AdminRequiredMixin(PortalPermissionMixin):
    """Admins only."""
    required_role = 'admin'
