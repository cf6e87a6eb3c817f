import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.config import settings
from jobboard.core.exceptions import (
    AlreadyAppliedError, CapacityExceededError, ForbiddenError, NotFoundError, ValidationError,
)
from jobboard.db.database import datastore_errors
from jobboard.models.job_application import JobApplication
from jobboard.models.user import UserRole
from jobboard.repositories.applicant_count_helper import count_applications_by_job_id
from jobboard.repositories.job_application_repo import JobApplicationRepository
from jobboard.repositories.job_repo import JobRepository
from jobboard.repositories.profile_repo import get_student_profile
from jobboard.services.alumni_service import get_alumni_profile_or_fail
from jobboard.services.auth.identity import Identity
from jobboard.services.logging import log_major_event

logger = logging.getLogger(__name__)


def serialize_application(application: JobApplication) -> dict:
    return {
        "job_id": application.job_id,
        "user_id": application.user_id,
        "resume_url": application.resume_url,
        "applicant_count": application.applicant_count,
        "applied_at": application.applied_at,
    }


class JobApplicationService:
    async def apply_job(self, identity: Identity, job_id: Optional[str], resume_url: Optional[str],
                        db: AsyncSession) -> dict:
        """Insert one application and rewrite the job's applicant_count in the same transaction.

        The job row is locked first so concurrent applicants to one job are
        serialized through the capacity check on PostgreSQL.
        """
        if not job_id:
            raise ValidationError("job_id is required")

        async with datastore_errors(db, "Server error while applying to job"):
            job = await JobRepository.lock_job(db, job_id)
            if not job:
                raise NotFoundError("Job not found")

            current = await count_applications_by_job_id(db, job_id)
            if current >= settings.MAX_APPLICATIONS_PER_JOB:
                await db.rollback()
                raise CapacityExceededError()

            if await JobApplicationRepository.get_by_user_and_job(db, identity.id, job_id):
                await db.rollback()
                raise AlreadyAppliedError()

            if not resume_url:
                profile = await get_student_profile(db, identity.id)
                resume_url = profile.resume_url if profile else None

            try:
                application = await JobApplicationRepository.create_application(db, {
                    "job_id": job_id,
                    "user_id": identity.id,
                    "resume_url": resume_url,
                })
                await db.commit()
            except IntegrityError:
                # lost the race against a concurrent duplicate
                await db.rollback()
                raise AlreadyAppliedError()
            await db.refresh(application)

        await log_major_event(action="application_created", status="success", user=identity.id,
                              entity=job_id, source="job_application_service")
        return {
            "success": True,
            "message": "Job application submitted",
            "application": serialize_application(application),
        }

    async def get_applied_jobs(self, identity: Identity, db: AsyncSession) -> dict:
        applications = await JobApplicationRepository.get_applications_by_user(db, identity.id)
        data = []
        for application in applications:
            item = serialize_application(application)
            job = application.job
            company = job.company if job else None
            item["job"] = {
                "job_title": job.job_title,
                "job_description": job.job_description,
                "created_at": job.created_at,
                "company": {"name": company.name, "website": company.website} if company else None,
            } if job else None
            data.append(item)
        return {"success": True, "count": len(data), "applications": data}

    async def withdraw_application(self, identity: Identity, job_id: str, db: AsyncSession) -> dict:
        async with datastore_errors(db, "Server error while withdrawing application"):
            application = await JobApplicationRepository.get_by_user_and_job(db, identity.id, job_id)
            if not application:
                raise NotFoundError("Application not found")
            await JobApplicationRepository.delete_application(db, identity.id, job_id)
            await db.commit()

        await log_major_event(action="application_withdrawn", status="success", user=identity.id,
                              entity=job_id, source="job_application_service")
        return {"success": True, "message": "Application withdrawn successfully"}

    async def view_applicants(self, identity: Identity, job_id: str, db: AsyncSession) -> dict:
        if identity.role == UserRole.alumni:
            profile = await get_alumni_profile_or_fail(db, identity.id)
            if not await JobRepository.get_owned_job(db, job_id, profile.id):
                raise ForbiddenError("Not authorized to view applicants of this job")
        elif identity.role != UserRole.admin:
            raise ForbiddenError("Not authorized")

        rows = await JobApplicationRepository.get_applicants_with_profiles(db, job_id)
        applicants = []
        for application, student in rows:
            item = serialize_application(application)
            item["email"] = application.user.email if application.user else None
            item["name"] = student.name if student else None
            item["branch"] = student.branch if student else None
            item["grad_year"] = student.grad_year if student else None
            applicants.append(item)
        return {"success": True, "count": len(applicants), "applicants": applicants}
