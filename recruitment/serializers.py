# recruitment/serializers.py
from rest_framework import serializers

from emp.models import Department
from emp.serializers import DepartmentBriefSerializer
from .models import Applicant, JobVacancy


class JobVacancySerializer(serializers.ModelSerializer):
    department = DepartmentBriefSerializer(read_only=True)
    department_id = serializers.PrimaryKeyRelatedField(
        queryset=Department.objects.all(), source='department', write_only=True)
    applicant_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = JobVacancy
        fields = ('id', 'title', 'department', 'department_id', 'description',
                  'requirements', 'salary_range', 'status', 'closing_date',
                  'applicant_count', 'posted_date', 'updated_at')
        read_only_fields = ('posted_date', 'updated_at')


class JobBriefSerializer(serializers.ModelSerializer):
    department = serializers.CharField(source='department.name', read_only=True)

    class Meta:
        model = JobVacancy
        fields = ('id', 'title', 'department', 'status')


class ApplicantSerializer(serializers.ModelSerializer):
    job = JobBriefSerializer(read_only=True)

    class Meta:
        model = Applicant
        fields = ('id', 'job', 'first_name', 'last_name', 'email', 'phone',
                  'resume', 'cover_letter', 'status', 'notes',
                  'interview_date', 'applied_date')


class PublicApplicantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Applicant
        fields = ('id', 'first_name', 'last_name', 'email', 'status')


class ApplySerializer(serializers.Serializer):
    job_id = serializers.IntegerField(min_value=1)
    first_name = serializers.CharField(max_length=80)
    last_name = serializers.CharField(max_length=80)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    resume = serializers.CharField(required=False, allow_blank=True)
    cover_letter = serializers.CharField(required=False, allow_blank=True)


class ApplicantStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Applicant.STATUS_CHOICES)
    notes = serializers.CharField(required=False, allow_blank=True)
    interview_date = serializers.DateTimeField(required=False)


class JobQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JobVacancy.STATUS_CHOICES, required=False)
    department_id = serializers.IntegerField(required=False, min_value=1)


class ApplicantQuerySerializer(serializers.Serializer):
    job_id = serializers.IntegerField(required=False, min_value=1)
    status = serializers.ChoiceField(choices=Applicant.STATUS_CHOICES, required=False)
