"""
URL configuration for careers app.
"""
from django.urls import path
from . import views

app_name = 'careers'

urlpatterns = [
    path('careers/', views.PublicJobListView.as_view(), name='job_list'),
    path('apply/<str:pk>/', views.ApplyView.as_view(), name='apply'),
]
