# emp/serializers.py
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import serializers

from .models import Attendance, Department, Employee, LeaveRequest, LeaveType


class DepartmentBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ('id', 'name', 'status')


class DepartmentSerializer(serializers.ModelSerializer):
    employee_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Department
        fields = ('id', 'name', 'description', 'status',
                  'employee_count', 'created_at', 'updated_at')
        read_only_fields = ('created_at', 'updated_at')


class EmployeeSerializer(serializers.ModelSerializer):
    department = DepartmentBriefSerializer(read_only=True)
    full_name = serializers.CharField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Employee
        fields = ('id', 'employee_code', 'full_name', 'first_name', 'last_name',
                  'email', 'phone', 'address', 'department', 'position',
                  'salary', 'hire_date', 'status', 'user_id',
                  'created_at', 'updated_at')


class EmployeeBriefSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    department = serializers.CharField(source='department.name', read_only=True)

    class Meta:
        model = Employee
        fields = ('id', 'employee_code', 'full_name', 'department')


class AttendanceSerializer(serializers.ModelSerializer):
    employee = EmployeeBriefSerializer(read_only=True)

    class Meta:
        model = Attendance
        fields = ('id', 'employee', 'date', 'check_in', 'check_out',
                  'hours_worked', 'status', 'notes', 'created_at', 'updated_at')


class DayField(serializers.DateField):
    """
    Accepts an ISO date or date-time; date-times are truncated to the
    local calendar day.
    """

    def to_internal_value(self, value):
        if isinstance(value, str):
            try:
                dt = parse_datetime(value)
            except ValueError:
                self.fail('invalid', format='YYYY-MM-DD')
            if dt is not None:
                if timezone.is_naive(dt):
                    dt = timezone.make_aware(dt)
                return timezone.localdate(dt)
        return super().to_internal_value(value)


class AttendanceEntrySerializer(serializers.Serializer):
    employee_id = serializers.PrimaryKeyRelatedField(
        queryset=Employee.objects.all(), source='employee')
    date = DayField()
    status = serializers.ChoiceField(choices=Attendance.STATUS_CHOICES)
    check_in = serializers.DateTimeField(required=False, allow_null=True)
    check_out = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(
        required=False, allow_null=True, allow_blank=True)


class AttendanceQuerySerializer(serializers.Serializer):
    employee_id = serializers.IntegerField(required=False, min_value=1)
    start_date = DayField(required=False)
    end_date = DayField(required=False)


# Leave
class LeaveTypeSerializer(serializers.ModelSerializer):
    days = serializers.IntegerField(min_value=1)

    class Meta:
        model = LeaveType
        fields = ('id', 'name', 'days', 'description', 'created_at', 'updated_at')
        read_only_fields = ('created_at', 'updated_at')

    def validate_name(self, value):
        name = value.strip()
        if not name:
            raise serializers.ValidationError("Name is required.")
        qs = LeaveType.objects.filter(name__iexact=name)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError(
                "A leave type with this name already exists.")
        return name


class LeaveRequestSerializer(serializers.ModelSerializer):
    employee = EmployeeBriefSerializer(read_only=True)
    leave_type = LeaveTypeSerializer(read_only=True)

    class Meta:
        model = LeaveRequest
        fields = ('id', 'employee', 'leave_type', 'start_date', 'end_date',
                  'days', 'reason', 'status', 'applied_date',
                  'approved_by', 'approved_date', 'comments')


class LeaveApplySerializer(serializers.Serializer):
    leave_type_id = serializers.PrimaryKeyRelatedField(
        queryset=LeaveType.objects.all(), source='leave_type')
    start_date = DayField()
    end_date = DayField()
    reason = serializers.CharField(
        required=False, allow_null=True, allow_blank=True)


class LeaveQuerySerializer(serializers.Serializer):
    employee_id = serializers.IntegerField(required=False, min_value=1)
    status = serializers.ChoiceField(
        choices=LeaveRequest.STATUS_CHOICES, required=False)
    start_date = DayField(required=False)
    end_date = DayField(required=False)
