"""
URL configuration for organizations app.
"""
from django.urls import path
from . import views

app_name = 'organizations'

urlpatterns = [
    # Offices
    path('offices/', views.OfficeListView.as_view(), name='office_list'),
    path('offices/create/', views.OfficeCreateView.as_view(), name='office_create'),
    path('offices/<str:pk>/edit/', views.OfficeUpdateView.as_view(), name='office_update'),
    path('offices/<str:pk>/delete/', views.OfficeDeleteView.as_view(), name='office_delete'),

    # Users
    path('users/', views.UserListView.as_view(), name='user_list'),
    path('users/create/', views.UserCreateView.as_view(), name='user_create'),
    path('users/<str:pk>/edit/', views.UserUpdateView.as_view(), name='user_update'),
    path('users/<str:pk>/delete/', views.UserDeleteView.as_view(), name='user_delete'),
]
