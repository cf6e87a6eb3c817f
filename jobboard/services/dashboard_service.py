from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from jobboard.models.user import User
from jobboard.models.company import Company, CompanyStatus
from jobboard.models.job_application import JobApplication
from jobboard.repositories.job_application_repo import JobApplicationRepository
from jobboard.repositories.job_repo import JobRepository
from datetime import datetime, timedelta, timezone


async def get_admin_dashboard(db: AsyncSession):
    now = datetime.now(timezone.utc)
    thirty_days_ago = now - timedelta(days=30)
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    new_users_query = select(func.count()).select_from(User).where(User.created_at > thirty_days_ago)
    new_users = (await db.execute(new_users_query)).scalar() or 0

    # approved is the only company state that can post publicly
    companies_query = select(func.count()).select_from(Company).where(Company.status == CompanyStatus.approved)
    active_companies = (await db.execute(companies_query)).scalar() or 0

    live_postings = await JobRepository.count_jobs(db)

    today_query = select(func.count()).select_from(JobApplication).where(JobApplication.applied_at >= start_of_today)
    applications_today = (await db.execute(today_query)).scalar() or 0

    return {
        "success": True,
        "new_users": new_users,
        "active_companies": active_companies,
        "live_postings": live_postings,
        "applications_today": applications_today,
    }


async def get_alumni_dashboard(db: AsyncSession, alumni_profile_id: str):
    jobs = await JobRepository.get_jobs_by_alumni(db, alumni_profile_id)
    job_ids = [j.id for j in jobs]
    seven_days_ago = datetime.now(timezone.utc) - timedelta(days=7)

    # Recent jobs (last 5 by created_at), each with its live applicant total
    recent_jobs = [
        {
            "job_id": j.id,
            "job_title": j.job_title,
            "applicants": await JobApplicationRepository.count_for_jobs(db, [j.id]),
            "date": j.created_at.date().isoformat() if j.created_at else None,
        }
        for j in jobs[:5]
    ]

    return {
        "success": True,
        "total_jobs": len(jobs),
        "total_applications": await JobApplicationRepository.count_for_jobs(db, job_ids),
        "recent_applications": await JobApplicationRepository.count_for_jobs(db, job_ids, since=seven_days_ago),
        "recent_jobs": recent_jobs,
    }
