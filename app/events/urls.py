"""
URL configuration for events app.
"""
from django.urls import path
from . import views

app_name = 'events'

urlpatterns = [
    path('', views.EventListView.as_view(), name='event_list'),
    path('create/', views.EventCreateView.as_view(), name='event_create'),
    path('check-duplicates/', views.DuplicateCheckView.as_view(), name='check_duplicates'),
    path('scan/', views.ScanPrefillView.as_view(), name='scan_prefill'),
    path('<str:pk>/', views.EventDetailView.as_view(), name='event_detail'),
    path('<str:pk>/edit/', views.EventUpdateView.as_view(), name='event_update'),
    path('<str:pk>/delete/', views.EventDeleteView.as_view(), name='event_delete'),
    path('<str:pk>/attendees/', views.EventAttendeesView.as_view(), name='event_attendees'),
    path('<str:pk>/intake/', views.FairIntakeView.as_view(), name='fair_intake'),
]
