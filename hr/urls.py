# hr/urls.py
from django.urls import path
from . import views

app_name = 'hr'

urlpatterns = [

    path('employees/', views.HRListCreateEmployeesAPIView.as_view(),
         name='employees-list'),

    path('employees/<int:pk>/', views.HREmployeeDetailAPIView.as_view(),
         name='employee-detail'),

    path('departments/', views.DepartmentListCreateAPIView.as_view(),
         name='departments-list'),

    path('departments/<int:pk>/', views.DepartmentDetailAPIView.as_view(),
         name='department-detail'),

    path('payroll/', views.PayrollListCreateAPIView.as_view(),
         name='payroll-list'),

    path('payroll/<int:pk>/', views.PayrollDetailAPIView.as_view(),
         name='payroll-detail'),

    path('payroll/<int:pk>/paid/', views.PayrollMarkPaidAPIView.as_view(),
         name='payroll-mark-paid'),

    path('leave/types/', views.LeaveTypeListCreateAPIView.as_view(),
         name='leave-types-list'),

    path('leave/types/<int:pk>/', views.LeaveTypeDetailAPIView.as_view(),
         name='leave-type-detail'),

    path('leave/<int:pk>/approve/', views.LeaveApproveAPIView.as_view(),
         name='leave-approve'),

    path('leave/<int:pk>/reject/', views.LeaveRejectAPIView.as_view(),
         name='leave-reject'),

    path('dashboard/stats/', views.DashboardStatsAPIView.as_view(),
         name='dashboard-stats'),

    path('dashboard/recent-activity/', views.RecentActivityAPIView.as_view(),
         name='dashboard-recent-activity'),
]
