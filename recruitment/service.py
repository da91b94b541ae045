import logging

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from emp.exceptions import DuplicateApplication, RecordNotFound, VacancyClosed
from .models import Applicant, JobVacancy

logger = logging.getLogger(__name__)


class RecruitmentService:

    @staticmethod
    def open_vacancies(today=None):
        """Open vacancies whose closing date, if any, has not passed."""
        today = today or timezone.localdate()
        return (JobVacancy.objects
                .filter(status=JobVacancy.STATUS_OPEN)
                .filter(Q(closing_date__isnull=True) | Q(closing_date__gte=today))
                .select_related("department"))

    @staticmethod
    def apply(job_id, first_name, last_name, email, today=None, **extra):
        today = today or timezone.localdate()
        job = JobVacancy.objects.filter(pk=job_id).first()
        if job is None:
            raise RecordNotFound("Job vacancy not found.")
        if job.status != JobVacancy.STATUS_OPEN:
            raise VacancyClosed()
        if job.closing_date and job.closing_date < today:
            raise VacancyClosed(
                "The application deadline for this position has passed.")

        email = email.lower()
        try:
            with transaction.atomic():
                applicant = Applicant.objects.create(
                    job=job,
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    **extra,
                )
        except IntegrityError:
            raise DuplicateApplication()

        logger.info("Application received: job=%s applicant=%s",
                    job.pk, applicant.pk)
        return applicant

    @staticmethod
    def set_status(applicant_id, status, notes=None, interview_date=None):
        applicant = (Applicant.objects.select_related("job", "job__department")
                     .filter(pk=applicant_id).first())
        if applicant is None:
            raise RecordNotFound("Applicant not found.")

        applicant.status = status
        update_fields = ["status", "updated_at"]
        if notes:
            applicant.notes = notes
            update_fields.append("notes")
        if interview_date:
            applicant.interview_date = interview_date
            update_fields.append("interview_date")
        applicant.save(update_fields=update_fields)

        logger.info("Applicant %s moved to %s", applicant.pk, status)
        return applicant
