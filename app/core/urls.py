"""
URL configuration for the applicant-tracking portal.
"""
from django.urls import path, include
from django.conf.urls.i18n import i18n_patterns
from django.views.generic import TemplateView

# Health check endpoint
urlpatterns = [
    path('health/', TemplateView.as_view(template_name='health.html'), name='health'),
]

urlpatterns += i18n_patterns(
    path('', include('dashboard.urls')),
    path('', include('careers.urls')),
    path('', include('recruiting.urls')),
    path('events/', include('events.urls')),
    path('team/', include('organizations.urls')),
    path('settings/', include('emails.urls')),
    prefix_default_language=False,
)
