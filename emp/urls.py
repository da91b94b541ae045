# emp/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('employees/me/', views.MyEmployeeView.as_view(), name='my-employee'),

    path('attendance/', views.AttendanceListCreateAPIView.as_view(),
         name='attendance-list'),

    path('attendance/<int:pk>/', views.AttendanceRetrieveAPIView.as_view(),
         name='attendance-detail'),

    path('attendance/checkin/', views.CheckInAPIView.as_view(), name='check-in'),

    path('attendance/checkout/', views.CheckOutAPIView.as_view(), name='check-out'),

    path('leave/', views.LeaveListCreateAPIView.as_view(), name='leave-list'),

    path('leave/<int:pk>/', views.LeaveRetrieveAPIView.as_view(),
         name='leave-detail'),
]
