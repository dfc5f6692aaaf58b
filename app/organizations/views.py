"""
Views for office and user management.
"""
import logging

from django.contrib import messages
from django.contrib.messages.views import SuccessMessageMixin
from django.shortcuts import redirect
from django.urls import reverse_lazy
from django.utils.translation import gettext as _
from django.views import View
from django.views.generic import TemplateView, FormView

from core.api import ApiError
from core.mixins import AdminRequiredMixin
from core.pagination import MAX_PAGE_SIZE, ListQuery, is_paginated, normalize
from core.roles import ROLE_CHOICES
from core.utils import as_list, find_by_id
from .forms import OfficeForm, UserForm, UserSearchForm

logger = logging.getLogger(__name__)



def find_user(api, pk):
    """Walk the user list page by page until ``pk`` turns up."""
    page = 1
    while True:
        payload = api.get('/users', params={'page': str(page), 'pageSize': str(MAX_PAGE_SIZE)})
        match = find_by_id(as_list(payload), pk)
        if match is not None or not is_paginated(payload) or page >= int(payload['totalPages']):
            return match
        page += 1


# Office Views
class OfficeListView(AdminRequiredMixin, TemplateView):
    """List offices with their job counts."""
    template_name = 'organizations/office_list.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['offices'] = as_list(self.api.get('/offices'))
        return context


class OfficeFormMixin(AdminRequiredMixin, SuccessMessageMixin):
    form_class = OfficeForm
    template_name = 'organizations/office_form.html'
    success_url = reverse_lazy('organizations:office_list')


class OfficeCreateView(OfficeFormMixin, FormView):
    """Create new office."""
    success_message = _('Office created successfully!')

    def form_valid(self, form):
        try:
            self.api.post('/offices', form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)


class OfficeUpdateView(OfficeFormMixin, FormView):
    """Update office."""
    success_message = _('Office updated successfully!')

    def get_office(self):
        if not hasattr(self, '_office'):
            office = find_by_id(as_list(self.api.get('/offices')), self.kwargs['pk'])
            if office is None:
                raise ApiError('Office not found', status_code=404)
            self._office = office
        return self._office

    def get_initial(self):
        return OfficeForm.initial_from_office(self.get_office())

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['office'] = self.get_office()
        return context

    def form_valid(self, form):
        try:
            self.api.put(f"/offices/{self.kwargs['pk']}", form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)


class OfficeDeleteView(AdminRequiredMixin, TemplateView):
    """Confirm and delete an office."""
    template_name = 'organizations/office_confirm_delete.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        office = find_by_id(as_list(self.api.get('/offices')), self.kwargs['pk'])
        if office is None:
            raise ApiError('Office not found', status_code=404)
        context['office'] = office
        return context

    def post(self, request, pk):
        try:
            self.api.delete(f'/offices/{pk}')
        except ApiError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, _('Office deleted.'))
        return redirect('organizations:office_list')


# User Views
class UserListView(AdminRequiredMixin, TemplateView):
    """List portal users by role with search."""
    template_name = 'organizations/user_list.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        query = ListQuery.from_request(self.request, filters=('role',))
        page = normalize(self.api.get('/users', params=query.api_params()), query.page_size, query.page)
        offices = {str(office['id']): office.get('name', '') for office in as_list(self.api.get('/offices'))}
        context.update({
            'users': page.data,
            'page': page,
            'query': query,
            'search_form': UserSearchForm(self.request.GET),
            'role_choices': ROLE_CHOICES,
            'office_names': offices,
        })
        return context


class UserFormMixin(AdminRequiredMixin, SuccessMessageMixin):
    form_class = UserForm
    template_name = 'organizations/user_form.html'
    success_url = reverse_lazy('organizations:user_list')

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        try:
            options = self.api.get('/email-settings/notification-subs/options') or {}
        except ApiError as e:
            logger.info(f"Scope options unavailable: {e.message}")
            options = {}
        kwargs['departments'] = options.get('departments') or []
        kwargs['offices'] = options.get('offices') or []
        return kwargs


class UserCreateView(UserFormMixin, FormView):
    """Create new user."""
    success_message = _('User created successfully!')

    def form_valid(self, form):
        try:
            self.api.post('/users', form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        logger.info(f"User {form.cleaned_data['email']} created by {self.portal_user.email}")
        return super().form_valid(form)


class UserUpdateView(UserFormMixin, FormView):
    """Update user. The password is only sent when a new one is entered."""
    success_message = _('User updated successfully!')

    def get_user(self):
        if not hasattr(self, '_user'):
            match = find_user(self.api, self.kwargs['pk'])
            if match is None:
                raise ApiError('User not found', status_code=404)
            self._user = match
        return self._user

    def get_initial(self):
        return UserForm.initial_from_user(self.get_user())

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['editing'] = True
        return kwargs

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['edited_user'] = self.get_user()
        return context

    def form_valid(self, form):
        try:
            self.api.put(f"/users/{self.kwargs['pk']}", form.to_payload())
        except ApiError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        return super().form_valid(form)


class UserDeleteView(AdminRequiredMixin, View):

    def post(self, request, pk):
        if pk == self.portal_user.id:
            messages.error(request, _('You cannot delete your own account.'))
            return redirect('organizations:user_list')
        try:
            self.api.delete(f'/users/{pk}')
        except ApiError as e:
            messages.error(request, e.message)
        else:
            logger.info(f"User {pk} deleted by {self.portal_user.email}")
            messages.success(request, _('User deleted.'))
        return redirect('organizations:user_list')
