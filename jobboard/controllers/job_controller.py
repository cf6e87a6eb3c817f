from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from jobboard.db.database import get_db
from jobboard.models.user import UserRole
from jobboard.schemas.job_schema import ApplyJobRequest, JobCreate, JobUpdate
from jobboard.services.auth.auth_service import require_roles
from jobboard.services.auth.identity import Identity
from jobboard.services.job_application_service import JobApplicationService
from jobboard.services.job_service import JobService

router = APIRouter()
job_service = JobService()
application_service = JobApplicationService()

alumni_required = require_roles(UserRole.alumni)
student_required = require_roles(UserRole.student)


# --- Alumni: job management ---
@router.post("/post-job", status_code=status.HTTP_201_CREATED)
async def post_job(
    data: JobCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    return await job_service.post_job(current_user, data.job_title, data.job_description, db)


@router.get("/get-my-jobs")
async def get_my_jobs(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    return await job_service.get_my_jobs(current_user, db)


@router.get("/get-job-by-id/{job_id}")
async def get_job_by_id(
    job_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    return await job_service.get_job_by_id(current_user, job_id, db)


@router.put("/update-job/{job_id}")
async def update_job(
    job_id: str,
    data: JobUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    return await job_service.update_job(current_user, job_id, data.model_dump(exclude_none=True), db)


@router.delete("/delete-job/{job_id}")
async def delete_job(
    job_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    return await job_service.delete_job(current_user, job_id, db)


# --- Public: job browsing ---
@router.get("/get-all-jobs-student")
async def get_all_jobs_student(
    search: Optional[str] = Query(None, max_length=100),
    limit: Optional[int] = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db)
):
    return await job_service.list_jobs_for_students(db, search=search, limit=limit, offset=offset)


@router.get("/get-job-by-id-student/{job_id}")
async def get_job_by_id_student(job_id: str, db: AsyncSession = Depends(get_db)):
    return await job_service.get_job_for_student(job_id, db)


# --- Student: applications ---
@router.post("/apply-job", status_code=status.HTTP_201_CREATED)
async def apply_job(
    data: ApplyJobRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(student_required)
):
    return await application_service.apply_job(current_user, data.job_id, data.resume_url, db)


@router.get("/get-applied-jobs")
async def get_applied_jobs(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(student_required)
):
    return await application_service.get_applied_jobs(current_user, db)


@router.delete("/withdraw-application/{job_id}")
async def withdraw_application(
    job_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(student_required)
):
    return await application_service.withdraw_application(current_user, job_id, db)


@router.get("/view-applicants/{job_id}")
async def view_applicants(
    job_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(require_roles(UserRole.alumni, UserRole.admin))
):
    return await application_service.view_applicants(current_user, job_id, db)
