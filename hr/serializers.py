# hr/serializers.py
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import serializers

from emp.models import Department, Employee
from emp.serializers import EmployeeBriefSerializer
from emp.utils import generate_employee_code
from .constants import PAYROLL_MIN_YEAR
from .models import Payroll

User = get_user_model()


class EmployeeWriteSerializer(serializers.ModelSerializer):
    """
    HR create/update of an employee. On create, a login account is made
    too when `password` is supplied.
    """
    employee_code = serializers.CharField(max_length=20, required=False)
    department_id = serializers.PrimaryKeyRelatedField(
        queryset=Department.objects.all(), source='department')
    salary = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0)
    password = serializers.CharField(
        write_only=True, required=False, min_length=6)
    role = serializers.ChoiceField(
        choices=User.ROLE_CHOICES, write_only=True, required=False)

    class Meta:
        model = Employee
        fields = ('id', 'employee_code', 'first_name', 'last_name', 'email',
                  'phone', 'address', 'department_id', 'position', 'salary',
                  'hire_date', 'status', 'password', 'role')

    def validate_email(self, value):
        email = value.lower()
        qs = Employee.objects.filter(email__iexact=email)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError(
                "Employee with this email already exists.")
        if self.instance is None and User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError(
                "User with this email already exists.")
        return email

    def validate_employee_code(self, value):
        qs = Employee.objects.filter(employee_code=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError(
                "Employee with this code already exists.")
        return value

    @transaction.atomic
    def create(self, validated_data):
        password = validated_data.pop('password', None)
        role = validated_data.pop('role', User.EMPLOYEE)
        if not validated_data.get('employee_code'):
            validated_data['employee_code'] = generate_employee_code()

        if password:
            user = User(
                email=validated_data['email'],
                username=validated_data['email'],
                first_name=validated_data['first_name'],
                last_name=validated_data['last_name'],
                role=role,
            )
            user.set_password(password)
            user.save()
            validated_data['user'] = user

        return super().create(validated_data)

    def update(self, instance, validated_data):
        # login accounts are managed through auth/register
        validated_data.pop('password', None)
        validated_data.pop('role', None)
        return super().update(instance, validated_data)


class PayrollSerializer(serializers.ModelSerializer):
    employee = EmployeeBriefSerializer(read_only=True)

    class Meta:
        model = Payroll
        fields = ('id', 'employee', 'month', 'year', 'basic_salary',
                  'allowances', 'deductions', 'net_salary', 'working_days',
                  'status', 'paid_date', 'generated_by', 'created_at')


class PayrollGenerateSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField(min_value=1)
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=PAYROLL_MIN_YEAR)


class PayrollQuerySerializer(serializers.Serializer):
    employee_id = serializers.IntegerField(required=False, min_value=1)
    month = serializers.IntegerField(required=False, min_value=1, max_value=12)
    year = serializers.IntegerField(required=False, min_value=PAYROLL_MIN_YEAR)


class LeaveDecisionSerializer(serializers.Serializer):
    comments = serializers.CharField(
        required=False, allow_null=True, allow_blank=True)
