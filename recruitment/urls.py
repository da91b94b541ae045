# recruitment/urls.py
from django.urls import path
from . import views

app_name = 'recruitment'

urlpatterns = [
    path('public/jobs/', views.PublicJobListAPIView.as_view(),
         name='public-jobs'),

    path('public/jobs/<int:pk>/', views.PublicJobDetailAPIView.as_view(),
         name='public-job-detail'),

    path('public/apply/', views.PublicApplyAPIView.as_view(),
         name='public-apply'),

    path('jobs/', views.JobListCreateAPIView.as_view(), name='jobs-list'),

    path('jobs/<int:pk>/', views.JobDetailAPIView.as_view(), name='job-detail'),

    path('applicants/', views.ApplicantListCreateAPIView.as_view(),
         name='applicants-list'),

    path('applicants/<int:pk>/status/', views.ApplicantStatusAPIView.as_view(),
         name='applicant-status'),
]
