# emp/views.py
from django.db import transaction
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from login.permissions import IsHROrAdmin
from . import serializers
from .models import Attendance, LeaveRequest
from .permissions import IsOwnerOrHR
from .services import AttendanceQueryService, AttendanceService, LeaveService
from .utils import get_employee_for_user


class MyEmployeeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=serializers.EmployeeSerializer)
    def get(self, request):
        employee = get_employee_for_user(request.user)
        return Response(serializers.EmployeeSerializer(employee).data)


class AttendanceListCreateAPIView(APIView):
    """
    GET: role-scoped attendance list. POST: HR/admin upsert for a day.
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        parameters=[
            OpenApiParameter('employee_id', OpenApiTypes.INT),
            OpenApiParameter('start_date', OpenApiTypes.DATE),
            OpenApiParameter('end_date', OpenApiTypes.DATE),
        ],
        responses=serializers.AttendanceSerializer(many=True),
    )
    def get(self, request):
        query = serializers.AttendanceQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        if not request.user.is_hr_or_admin:
            # employees without an employee record get a 404, not an empty list
            get_employee_for_user(request.user)

        qs = AttendanceQueryService.list_for(request.user, **query.validated_data)
        data = serializers.AttendanceSerializer(qs, many=True).data
        return Response({"attendance": data})

    @extend_schema(request=serializers.AttendanceEntrySerializer,
                   responses={200: serializers.AttendanceSerializer,
                              201: serializers.AttendanceSerializer})
    def post(self, request):
        entry = serializers.AttendanceEntrySerializer(data=request.data)
        entry.is_valid(raise_exception=True)

        with transaction.atomic():
            record, created = AttendanceService.record_entry(**entry.validated_data)
            data = serializers.AttendanceSerializer(record).data
        return Response(
            {"attendance": data},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


class AttendanceRetrieveAPIView(generics.RetrieveAPIView):
    permission_classes = [IsAuthenticated, IsOwnerOrHR]
    serializer_class = serializers.AttendanceSerializer
    queryset = Attendance.objects.select_related(
        'employee', 'employee__department')

    def retrieve(self, request, *args, **kwargs):
        return Response({"attendance": self.get_serializer(self.get_object()).data})


class CheckInAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={201: serializers.AttendanceSerializer})
    def post(self, request):
        employee = get_employee_for_user(request.user)
        att = AttendanceService.check_in(employee)
        return Response(
            {"attendance": serializers.AttendanceSerializer(att).data},
            status=status.HTTP_201_CREATED)


class CheckOutAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses=serializers.AttendanceSerializer)
    def post(self, request):
        employee = get_employee_for_user(request.user)
        att = AttendanceService.check_out(employee)
        return Response(
            {"attendance": serializers.AttendanceSerializer(att).data},
            status=status.HTTP_200_OK)



# -----------------------
# Leave (employee side)
# -----------------------
class LeaveListCreateAPIView(APIView):
    """
    GET: role-scoped leave requests. POST: the caller applies for leave.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[
            OpenApiParameter('employee_id', OpenApiTypes.INT),
            OpenApiParameter('status', OpenApiTypes.STR),
            OpenApiParameter('start_date', OpenApiTypes.DATE),
            OpenApiParameter('end_date', OpenApiTypes.DATE),
        ],
        responses=serializers.LeaveRequestSerializer(many=True),
    )
    def get(self, request):
        query = serializers.LeaveQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        if not request.user.is_hr_or_admin:
            get_employee_for_user(request.user)

        qs = LeaveService.list_for(request.user, **query.validated_data)
        data = serializers.LeaveRequestSerializer(qs, many=True).data
        return Response({"leave_requests": data})

    @extend_schema(request=serializers.LeaveApplySerializer,
                   responses={201: serializers.LeaveRequestSerializer})
    def post(self, request):
        employee = get_employee_for_user(request.user)
        ser = serializers.LeaveApplySerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        leave = LeaveService.apply(employee, **ser.validated_data)
        return Response(
            {"leave_request": serializers.LeaveRequestSerializer(leave).data},
            status=status.HTTP_201_CREATED)


class LeaveRetrieveAPIView(generics.RetrieveAPIView):
    permission_classes = [IsAuthenticated, IsOwnerOrHR]
    serializer_class = serializers.LeaveRequestSerializer
    queryset = LeaveRequest.objects.select_related(
        'employee', 'employee__department', 'leave_type')

    def retrieve(self, request, *args, **kwargs):
        return Response({"leave_request": self.get_serializer(self.get_object()).data})
