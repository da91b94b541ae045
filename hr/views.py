# hr/views.py
import logging

from django.db.models import Count, Q
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from emp.models import Department, Employee, LeaveType
from emp.permissions import IsOwnerOrHR, scope_to_user
from emp.serializers import (
    DepartmentSerializer, EmployeeSerializer, LeaveRequestSerializer, LeaveTypeSerializer)
from emp.utils import get_employee_for_user
from login.permissions import IsHROrAdmin, IsSystemAdmin
from . import serializers
from .models import Payroll
from .service import DashboardService, LeaveDecisionService, PayrollService

logger = logging.getLogger(__name__)


# -----------------------
# Employees
# -----------------------
class HRListCreateEmployeesAPIView(generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsHROrAdmin]

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return serializers.EmployeeWriteSerializer
        return EmployeeSerializer

    def get_queryset(self):
        qs = Employee.objects.all().select_related('department', 'user')
        params = self.request.query_params
        department_id = params.get('department_id')
        emp_status = params.get('status')
        search = params.get('search')
        if department_id:
            qs = qs.filter(department_id=department_id)
        if emp_status:
            qs = qs.filter(status=emp_status)
        if search:
            qs = qs.filter(
                Q(first_name__icontains=search) |
                Q(last_name__icontains=search) |
                Q(email__icontains=search) |
                Q(employee_code__icontains=search)
            )
        return qs

    def create(self, request, *args, **kwargs):
        serializer = serializers.EmployeeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = serializer.save()
        logger.info("Employee %s created by user=%s",
                    employee.employee_code, request.user.id)
        return Response(EmployeeSerializer(employee).data,
                        status=status.HTTP_201_CREATED)


class HREmployeeDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    queryset = Employee.objects.all().select_related('department', 'user')

    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [IsAuthenticated(), IsSystemAdmin()]
        if self.request.method in ('PUT', 'PATCH'):
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated(), IsOwnerOrHR()]

    def get_serializer_class(self):
        if self.request.method in ('PUT', 'PATCH'):
            return serializers.EmployeeWriteSerializer
        return EmployeeSerializer

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        employee = self.get_object()
        serializer = serializers.EmployeeWriteSerializer(
            employee, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        employee = serializer.save()
        return Response(EmployeeSerializer(employee).data)

    def perform_destroy(self, instance):
        logger.info("Employee %s deleted by user=%s",
                    instance.employee_code, self.request.user.id)
        instance.delete()


# -----------------------
# Departments
# -----------------------
class DepartmentListCreateAPIView(generics.ListCreateAPIView):
    serializer_class = DepartmentSerializer

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    def get_queryset(self):
        qs = Department.objects.annotate(employee_count=Count('employees'))
        dept_status = self.request.query_params.get('status')
        if dept_status:
            qs = qs.filter(status=dept_status)
        return qs.order_by('name')


class DepartmentDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = DepartmentSerializer
    queryset = Department.objects.annotate(employee_count=Count('employees'))

    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [IsAuthenticated(), IsSystemAdmin()]
        if self.request.method in ('PUT', 'PATCH'):
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    def destroy(self, request, *args, **kwargs):
        department = self.get_object()
        employee_count = department.employees.count()
        if employee_count > 0:
            return Response(
                {"detail": f"Cannot delete department with {employee_count} "
                           "employee(s). Please reassign employees first."},
                status=status.HTTP_400_BAD_REQUEST)
        department.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# -----------------------
# Payroll
# -----------------------
class PayrollListCreateAPIView(APIView):

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        parameters=[
            OpenApiParameter('employee_id', OpenApiTypes.INT),
            OpenApiParameter('month', OpenApiTypes.INT),
            OpenApiParameter('year', OpenApiTypes.INT),
        ],
        responses=serializers.PayrollSerializer(many=True),
    )
    def get(self, request):
        query = serializers.PayrollQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        filters = query.validated_data

        if request.user.is_hr_or_admin:
            qs = Payroll.objects.all()
            if filters.get('employee_id'):
                qs = qs.filter(employee_id=filters['employee_id'])
        else:
            get_employee_for_user(request.user)
            qs = scope_to_user(Payroll.objects.all(), request.user)

        if filters.get('month'):
            qs = qs.filter(month=filters['month'])
        if filters.get('year'):
            qs = qs.filter(year=filters['year'])

        qs = qs.select_related('employee', 'employee__department')
        return Response({"payrolls": serializers.PayrollSerializer(qs, many=True).data})

    @extend_schema(request=serializers.PayrollGenerateSerializer,
                   responses={201: serializers.PayrollSerializer})
    def post(self, request):
        ser = serializers.PayrollGenerateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        payroll = PayrollService.generate(
            generated_by=request.user, **ser.validated_data)
        return Response(
            {"payroll": serializers.PayrollSerializer(payroll).data},
            status=status.HTTP_201_CREATED)


class PayrollDetailAPIView(generics.RetrieveDestroyAPIView):
    serializer_class = serializers.PayrollSerializer
    queryset = Payroll.objects.select_related(
        'employee', 'employee__department')

    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [IsAuthenticated(), IsSystemAdmin()]
        return [IsAuthenticated(), IsOwnerOrHR()]

    def retrieve(self, request, *args, **kwargs):
        return Response({"payroll": self.get_serializer(self.get_object()).data})

    def perform_destroy(self, instance):
        logger.info("Payroll %s deleted by user=%s",
                    instance.pk, self.request.user.id)
        instance.delete()


class PayrollMarkPaidAPIView(APIView):
    permission_classes = [IsAuthenticated, IsHROrAdmin]

    @extend_schema(request=None, responses=serializers.PayrollSerializer)
    def put(self, request, pk):
        payroll = PayrollService.mark_paid(pk)
        return Response({"payroll": serializers.PayrollSerializer(payroll).data})


# -----------------------
# Leave types and HR decisions
# -----------------------
class LeaveTypeListCreateAPIView(generics.ListCreateAPIView):
    serializer_class = LeaveTypeSerializer
    queryset = LeaveType.objects.all()

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    def list(self, request, *args, **kwargs):
        data = self.get_serializer(self.get_queryset(), many=True).data
        return Response({"leave_types": data})

    def create(self, request, *args, **kwargs):
        response = super().create(request, *args, **kwargs)
        return Response({"leave_type": response.data},
                        status=status.HTTP_201_CREATED)


class LeaveTypeDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = LeaveTypeSerializer
    queryset = LeaveType.objects.all()

    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [IsAuthenticated(), IsSystemAdmin()]
        if self.request.method in ('PUT', 'PATCH'):
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    def retrieve(self, request, *args, **kwargs):
        return Response({"leave_type": self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        response = super().update(request, *args, **kwargs)
        return Response({"leave_type": response.data})

    def destroy(self, request, *args, **kwargs):
        leave_type = self.get_object()
        if leave_type.requests.exists():
            return Response(
                {"detail": "Cannot delete leave type that is being used "
                           "by leave requests."},
                status=status.HTTP_400_BAD_REQUEST)
        leave_type.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class LeaveDecisionAPIView(APIView):
    permission_classes = [IsAuthenticated, IsHROrAdmin]
    approve = True

    @extend_schema(request=serializers.LeaveDecisionSerializer,
                   responses=LeaveRequestSerializer)
    def put(self, request, pk):
        ser = serializers.LeaveDecisionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        leave = LeaveDecisionService.decide(
            pk, self.approve, request.user,
            comments=ser.validated_data.get('comments'))
        return Response({"leave_request": LeaveRequestSerializer(leave).data})


class LeaveApproveAPIView(LeaveDecisionAPIView):
    approve = True


class LeaveRejectAPIView(LeaveDecisionAPIView):
    approve = False


# -----------------------
# Dashboard
# -----------------------
class DashboardStatsAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=OpenApiTypes.OBJECT)
    def get(self, request):
        return Response(DashboardService.stats_for(request.user))


class RecentActivityAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=OpenApiTypes.OBJECT)
    def get(self, request):
        return Response(
            {"activities": DashboardService.recent_activity(request.user)})
