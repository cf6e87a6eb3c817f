import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.config import settings
from jobboard.core.exceptions import NotFoundError, ProfileIncompleteError, ValidationError
from jobboard.core.validators import InputValidator
from jobboard.db.database import datastore_errors
from jobboard.models.job import Job
from jobboard.repositories.company_repo import CompanyRepository
from jobboard.repositories.job_repo import JobRepository
from jobboard.services.alumni_service import compute_completion, get_alumni_profile_or_fail
from jobboard.services.auth.identity import Identity
from jobboard.services.logging import log_major_event

logger = logging.getLogger(__name__)

JOB_FIELDS = ("job_title", "job_description")


def serialize_job(job: Job) -> dict:
    return {
        "id": job.id,
        "company_id": job.company_id,
        "posted_by_alumni_id": job.posted_by_alumni_id,
        "job_title": job.job_title,
        "job_description": job.job_description,
        "created_at": job.created_at,
        "updated_at": job.updated_at,
    }


def serialize_public_job(job: Job) -> dict:
    """Job flattened with its company and poster, as students browse it."""
    company = job.company
    poster = job.poster
    return {
        "job_id": job.id,
        "job_title": job.job_title,
        "job_description": job.job_description,
        "created_at": job.created_at,
        "company_id": company.id if company else None,
        "company_name": company.name if company else None,
        "company_website": company.website if company else None,
        "company_about": company.about if company else None,
        "alumni_profile_id": poster.id if poster else None,
        "alumni_name": poster.name if poster else None,
        "alumni_designation": poster.current_title if poster else None,
        "alumni_grad_year": poster.grad_year if poster else None,
    }


def _clean_patch(data: dict) -> dict:
    patch = {}
    if data.get("job_title") is not None:
        title = InputValidator.clean_text(data["job_title"], max_length=255, field="job_title")
        if not title:
            raise ValidationError("job_title cannot be empty")
        patch["job_title"] = title
    if data.get("job_description") is not None:
        patch["job_description"] = InputValidator.clean_text(data["job_description"], field="job_description")
    return patch


class JobService:
    async def post_job(self, identity: Identity, job_title: Optional[str],
                       job_description: Optional[str], db: AsyncSession) -> dict:
        title = InputValidator.clean_text(job_title, max_length=255, field="job_title")
        if not title:
            raise ValidationError("job_title is required")

        async with datastore_errors(db, "Failed to post job"):
            profile = await get_alumni_profile_or_fail(db, identity.id)
            company = await CompanyRepository.get_by_alumni_id(db, profile.id)
            if company is None:
                company = await CompanyRepository.create_placeholder(db, profile)
                await db.commit()
                logger.info("Created placeholder company %s for alumni %s", company.id, profile.id)

            completion = compute_completion(profile, company)
            if completion < settings.JOB_POSTING_MIN_COMPLETION:
                raise ProfileIncompleteError(completion)

            job = await JobRepository.create_job(db, {
                "company_id": company.id,
                "posted_by_alumni_id": profile.id,
                "job_title": title,
                "job_description": (job_description or "").strip() or None,
            })

        await log_major_event(action="job_posted", status="success", user=identity.id,
                              entity=job.id, source="job_service")
        return {"success": True, "message": "Job posted successfully", "job": serialize_job(job)}

    async def get_my_jobs(self, identity: Identity, db: AsyncSession) -> dict:
        profile = await get_alumni_profile_or_fail(db, identity.id)
        jobs = await JobRepository.get_jobs_by_alumni(db, profile.id)
        return {"success": True, "count": len(jobs), "jobs": [serialize_job(j) for j in jobs]}

    async def get_owned_job_or_404(self, identity: Identity, job_id: str, db: AsyncSession) -> Job:
        # another alumni's job looks exactly like a missing one
        profile = await get_alumni_profile_or_fail(db, identity.id)
        job = await JobRepository.get_owned_job(db, job_id, profile.id)
        if not job:
            raise NotFoundError("Job not found or unauthorized.")
        return job

    async def get_job_by_id(self, identity: Identity, job_id: str, db: AsyncSession) -> dict:
        job = await self.get_owned_job_or_404(identity, job_id, db)
        data = serialize_job(job)
        company = job.company
        data["company"] = {
            "id": company.id,
            "name": company.name,
            "website": company.website,
            "about": company.about,
        } if company else None
        return {"success": True, "job": data}

    async def update_job(self, identity: Identity, job_id: str, data: dict, db: AsyncSession) -> dict:
        job = await self.get_owned_job_or_404(identity, job_id, db)
        patch = _clean_patch(data)
        if not patch:
            raise ValidationError("Provide job_title or job_description to update")
        async with datastore_errors(db, "Failed to update job"):
            job = await JobRepository.update_job(db, job, patch)
        return {"success": True, "message": "Job updated successfully", "job": serialize_job(job)}

    async def delete_job(self, identity: Identity, job_id: str, db: AsyncSession) -> dict:
        job = await self.get_owned_job_or_404(identity, job_id, db)
        async with datastore_errors(db, "Failed to delete job"):
            await JobRepository.delete_job(db, job.id)
        await log_major_event(action="job_deleted", status="success", user=identity.id,
                              entity=job_id, source="job_service")
        return {"success": True, "message": "Job deleted successfully"}

    async def list_jobs_for_students(self, db: AsyncSession, search: Optional[str] = None,
                                     limit: Optional[int] = None, offset: int = 0) -> dict:
        search = search.strip() if search else None
        jobs = await JobRepository.list_jobs(db, search=search, skip=offset, limit=limit)
        enriched = [serialize_public_job(job) for job in jobs]
        return {"success": True, "count": len(enriched), "jobs": enriched}

    async def get_job_for_student(self, job_id: str, db: AsyncSession) -> dict:
        job = await JobRepository.get_by_id(db, job_id, with_relations=True)
        if not job:
            raise NotFoundError("Job not found")
        return {"success": True, "job": serialize_public_job(job)}
