"""
URL configuration for recruiting app.
"""
from django.urls import path
from . import views

app_name = 'recruiting'

urlpatterns = [
    # Jobs
    path('jobs/', views.JobListView.as_view(), name='job_list'),
    path('jobs/create/', views.JobCreateView.as_view(), name='job_create'),
    path('jobs/<str:pk>/', views.JobDetailView.as_view(), name='job_detail'),
    path('jobs/<str:pk>/edit/', views.JobUpdateView.as_view(), name='job_update'),
    path('jobs/<str:pk>/status/', views.JobStatusView.as_view(), name='job_status'),
    path('jobs/<str:pk>/tracking/', views.JobTrackingLinksView.as_view(), name='job_tracking'),
    path('jobs/<str:pk>/linkedin/', views.JobLinkedInView.as_view(), name='job_linkedin'),

    # Applicants
    path('applicants/', views.ApplicantListView.as_view(), name='applicant_list'),
    path('applicants/create/', views.ApplicantCreateView.as_view(), name='applicant_create'),
    path('applicants/bulk/', views.ApplicantBulkActionView.as_view(), name='applicant_bulk'),
    path('applicants/<str:pk>/', views.ApplicantDetailView.as_view(), name='applicant_detail'),
    path('applicants/<str:pk>/stage/', views.ApplicantStageView.as_view(), name='applicant_stage'),
    path('applicants/<str:pk>/note/', views.ApplicantNoteView.as_view(), name='applicant_note'),
    path('applicants/<str:pk>/review/', views.ApplicantReviewView.as_view(), name='applicant_review'),
    path('applicants/<str:pk>/request-review/', views.RequestReviewView.as_view(), name='request_review'),

    # Pipeline
    path('pipeline/', views.PipelineView.as_view(), name='pipeline'),
    path('pipeline/move/', views.PipelineMoveView.as_view(), name='pipeline_move'),

    # Interviews
    path('applicants/<str:applicant_pk>/interviews/create/', views.InterviewCreateView.as_view(), name='interview_create'),
    path('interviews/<str:pk>/live/', views.LiveInterviewView.as_view(), name='interview_live'),
    path('interviews/<str:pk>/refresh/', views.InterviewRefreshView.as_view(), name='interview_refresh'),
    path('interviews/<str:pk>/feedback/', views.InterviewFeedbackView.as_view(), name='interview_feedback'),
    path('interviews/<str:pk>/update/', views.InterviewUpdateView.as_view(), name='interview_update'),
]
