# recruitment/views.py
from django.db.models import Count
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from emp.exceptions import RecordNotFound
from login.permissions import IsHROrAdmin
from . import serializers
from .models import Applicant, JobVacancy
from .service import RecruitmentService


# -----------------------
# Public (career page)
# -----------------------
class PublicJobListAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(responses=serializers.JobVacancySerializer(many=True))
    def get(self, request):
        jobs = RecruitmentService.open_vacancies()
        return Response({"jobs": serializers.JobVacancySerializer(jobs, many=True).data})


class PublicJobDetailAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(responses=serializers.JobVacancySerializer)
    def get(self, request, pk):
        job = RecruitmentService.open_vacancies().filter(pk=pk).first()
        if job is None:
            raise RecordNotFound("This job vacancy is not accepting applications.")
        return Response({"job": serializers.JobVacancySerializer(job).data})


class PublicApplyAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(request=serializers.ApplySerializer,
                   responses={201: serializers.PublicApplicantSerializer})
    def post(self, request):
        ser = serializers.ApplySerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        applicant = RecruitmentService.apply(**ser.validated_data)
        return Response({
            "message": "Application submitted successfully",
            "applicant": serializers.PublicApplicantSerializer(applicant).data,
        }, status=status.HTTP_201_CREATED)


# -----------------------
# Staff
# -----------------------
class JobListCreateAPIView(APIView):

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        parameters=[
            OpenApiParameter('status', OpenApiTypes.STR),
            OpenApiParameter('department_id', OpenApiTypes.INT),
        ],
        responses=serializers.JobVacancySerializer(many=True),
    )
    def get(self, request):
        query = serializers.JobQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        filters = query.validated_data

        qs = JobVacancy.objects.select_related('department').annotate(
            applicant_count=Count('applicants'))
        if filters.get('status'):
            qs = qs.filter(status=filters['status'])
        if filters.get('department_id'):
            qs = qs.filter(department_id=filters['department_id'])
        return Response({"jobs": serializers.JobVacancySerializer(qs, many=True).data})

    @extend_schema(request=serializers.JobVacancySerializer,
                   responses={201: serializers.JobVacancySerializer})
    def post(self, request):
        ser = serializers.JobVacancySerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        job = ser.save(created_by=request.user)
        return Response({"job": serializers.JobVacancySerializer(job).data},
                        status=status.HTTP_201_CREATED)


class JobDetailAPIView(generics.RetrieveUpdateAPIView):
    serializer_class = serializers.JobVacancySerializer
    queryset = JobVacancy.objects.select_related('department').annotate(
        applicant_count=Count('applicants'))

    def get_permissions(self):
        if self.request.method in ('PUT', 'PATCH'):
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    def retrieve(self, request, *args, **kwargs):
        return Response({"job": self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        response = super().update(request, *args, **kwargs)
        return Response({"job": response.data})


class ApplicantListCreateAPIView(APIView):

    def get_permissions(self):
        if self.request.method == 'GET':
            return [IsAuthenticated(), IsHROrAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        parameters=[
            OpenApiParameter('job_id', OpenApiTypes.INT),
            OpenApiParameter('status', OpenApiTypes.STR),
        ],
        responses=serializers.ApplicantSerializer(many=True),
    )
    def get(self, request):
        query = serializers.ApplicantQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        filters = query.validated_data

        qs = Applicant.objects.select_related('job', 'job__department')
        if filters.get('job_id'):
            qs = qs.filter(job_id=filters['job_id'])
        if filters.get('status'):
            qs = qs.filter(status=filters['status'])
        return Response({"applicants": serializers.ApplicantSerializer(qs, many=True).data})

    @extend_schema(request=serializers.ApplySerializer,
                   responses={201: serializers.ApplicantSerializer})
    def post(self, request):
        ser = serializers.ApplySerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        applicant = RecruitmentService.apply(**ser.validated_data)
        return Response({"applicant": serializers.ApplicantSerializer(applicant).data},
                        status=status.HTTP_201_CREATED)


class ApplicantStatusAPIView(APIView):
    permission_classes = [IsAuthenticated, IsHROrAdmin]

    @extend_schema(request=serializers.ApplicantStatusSerializer,
                   responses=serializers.ApplicantSerializer)
    def put(self, request, pk):
        ser = serializers.ApplicantStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        applicant = RecruitmentService.set_status(pk, **ser.validated_data)
        return Response({"applicant": serializers.ApplicantSerializer(applicant).data})
