from typing import List, Optional

from sqlalchemy import delete, func, or_
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from jobboard.models.job import Job


class JobRepository:
    @staticmethod
    async def create_job(db, data: dict) -> Job:
        job = Job(**data)
        db.add(job)
        await db.commit()
        await db.refresh(job)
        return job

    @staticmethod
    async def get_by_id(db, job_id: str, with_relations: bool = False) -> Optional[Job]:
        stmt = select(Job).where(Job.id == job_id)
        if with_relations:
            stmt = stmt.options(selectinload(Job.company), selectinload(Job.poster))
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_owned_job(db, job_id: str, alumni_profile_id: str) -> Optional[Job]:
        """The job only if it was posted by the given alumni profile."""
        result = await db.execute(
            select(Job)
            .where(Job.id == job_id, Job.posted_by_alumni_id == alumni_profile_id)
            .options(selectinload(Job.company))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def lock_job(db, job_id: str) -> Optional[Job]:
        # FOR UPDATE serializes applications to one job on PostgreSQL; SQLite ignores it
        result = await db.execute(select(Job).where(Job.id == job_id).with_for_update())
        return result.scalar_one_or_none()

    @staticmethod
    async def get_jobs_by_alumni(db, alumni_profile_id: str) -> List[Job]:
        result = await db.execute(
            select(Job)
            .where(Job.posted_by_alumni_id == alumni_profile_id)
            .order_by(Job.created_at.desc())
        )
        return result.scalars().all()

    @staticmethod
    async def list_jobs(db, search: Optional[str] = None, skip: int = 0, limit: Optional[int] = None) -> List[Job]:
        stmt = (
            select(Job)
            .options(selectinload(Job.company), selectinload(Job.poster))
            .order_by(Job.created_at.desc())
        )
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Job.job_title).like(pattern),
                func.lower(Job.job_description).like(pattern),
            ))
        if skip:
            stmt = stmt.offset(skip)
        if limit:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        return result.scalars().all()

    @staticmethod
    async def update_job(db, job: Job, update_data: dict) -> Job:
        for k, v in update_data.items():
            setattr(job, k, v)
        await db.commit()
        await db.refresh(job)
        return job

    @staticmethod
    async def delete_job(db, job_id: str) -> None:
        # applications cascade at the storage layer
        await db.execute(delete(Job).where(Job.id == job_id))
        await db.commit()

    @staticmethod
    async def count_jobs(db) -> int:
        return (await db.execute(select(func.count()).select_from(Job))).scalar() or 0
