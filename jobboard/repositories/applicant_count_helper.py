from sqlalchemy import func, select, update
from sqlalchemy.orm import aliased

from jobboard.models.job_application import JobApplication


async def count_applications_by_job_id(db, job_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(JobApplication).where(JobApplication.job_id == job_id)
    )
    return result.scalar() or 0


async def refresh_applicant_count(db, job_id: str) -> None:
    """Rewrite applicant_count on every remaining row of the job.

    Count and write happen in one UPDATE statement so the value always
    reflects the rows visible to this transaction. Does not commit.
    """
    # aliased so the subquery is not auto-correlated to the UPDATE target
    counted = aliased(JobApplication)
    total = (
        select(func.count())
        .select_from(counted)
        .where(counted.job_id == job_id)
        .scalar_subquery()
    )
    await db.execute(
        update(JobApplication)
        .where(JobApplication.job_id == job_id)
        .values(applicant_count=total)
        .execution_options(synchronize_session=False)
    )
