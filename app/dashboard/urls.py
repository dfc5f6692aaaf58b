"""
URL configuration for dashboard app.
"""
from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('', views.DashboardHomeView.as_view(), name='home'),
    path('notifications/', views.NotificationListView.as_view(), name='notifications'),
    path('notifications/unread/', views.UnreadCountView.as_view(), name='unread_count'),
    path('notifications/recent/', views.RecentNotificationsView.as_view(), name='recent_notifications'),
    path('notifications/read-all/', views.MarkAllReadView.as_view(), name='mark_all_read'),
    path('notifications/<str:pk>/read/', views.MarkNotificationReadView.as_view(), name='mark_read'),
]
