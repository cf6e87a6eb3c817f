from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.orm import selectinload
from typing import Optional, List
from datetime import datetime

from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.profile import StudentProfile
from jobboard.repositories.applicant_count_helper import refresh_applicant_count


class JobApplicationRepository:
    @staticmethod
    async def get_by_user_and_job(db: AsyncSession, user_id: str, job_id: str) -> Optional[JobApplication]:
        result = await db.execute(
            select(JobApplication).where(
                JobApplication.user_id == user_id,
                JobApplication.job_id == job_id
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create_application(db: AsyncSession, data: dict) -> JobApplication:
        """Insert the row and rewrite the job's applicant_count; the caller commits."""
        application = JobApplication(**data)
        db.add(application)
        await db.flush()
        await refresh_applicant_count(db, application.job_id)
        return application

    @staticmethod
    async def delete_application(db: AsyncSession, user_id: str, job_id: str) -> None:
        """Delete the row and rewrite the job's applicant_count; the caller commits."""
        await db.execute(
            delete(JobApplication).where(
                JobApplication.user_id == user_id,
                JobApplication.job_id == job_id
            )
        )
        await refresh_applicant_count(db, job_id)

    @staticmethod
    async def get_applications_by_user(db: AsyncSession, user_id: str) -> List[JobApplication]:
        """A user's applications with the job and its company loaded, newest first."""
        result = await db.execute(
            select(JobApplication)
            .where(JobApplication.user_id == user_id)
            .options(selectinload(JobApplication.job).selectinload(Job.company))
            .order_by(JobApplication.applied_at.desc())
        )
        return result.scalars().all()

    @staticmethod
    async def get_applicants_with_profiles(db: AsyncSession, job_id: str):
        """(application, student profile or None) pairs with the applicant user loaded."""
        result = await db.execute(
            select(JobApplication, StudentProfile)
            .outerjoin(StudentProfile, StudentProfile.user_id == JobApplication.user_id)
            .where(JobApplication.job_id == job_id)
            .options(selectinload(JobApplication.user))
            .order_by(JobApplication.applied_at.desc())
        )
        return result.all()

    @staticmethod
    async def count_for_jobs(db: AsyncSession, job_ids: List[str], since: Optional[datetime] = None) -> int:
        if not job_ids:
            return 0
        stmt = select(func.count()).select_from(JobApplication).where(JobApplication.job_id.in_(job_ids))
        if since is not None:
            stmt = stmt.where(JobApplication.applied_at >= since)
        return (await db.execute(stmt)).scalar() or 0

    @staticmethod
    async def count_for_user(db: AsyncSession, user_id: str) -> int:
        stmt = select(func.count()).select_from(JobApplication).where(JobApplication.user_id == user_id)
        return (await db.execute(stmt)).scalar() or 0

    @staticmethod
    async def first_application_date(db: AsyncSession, user_id: str) -> Optional[datetime]:
        stmt = select(func.min(JobApplication.applied_at)).where(JobApplication.user_id == user_id)
        return (await db.execute(stmt)).scalar()
