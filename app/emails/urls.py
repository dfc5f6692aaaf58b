"""
URL configuration for emails app.
"""
from django.urls import path
from . import views

app_name = 'emails'

urlpatterns = [
    path('content/', views.SiteContentView.as_view(), name='site_content'),
    path('templates/', views.EmailTemplateView.as_view(), name='templates'),
    path('access/', views.ReviewerAccessView.as_view(), name='reviewer_access'),
    path('subscribers/', views.JobSubscribersView.as_view(), name='job_subscribers'),
    path('notifications/', views.NotificationSubscriptionsView.as_view(), name='notification_subscriptions'),
]
