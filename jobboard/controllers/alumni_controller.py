from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from jobboard.db.database import get_db
from jobboard.models.user import UserRole
from jobboard.schemas.profile_schema import AlumniProfileUpdate, CompanyUpsert
from jobboard.services.alumni_service import AlumniService
from jobboard.services.auth.auth_service import get_current_user, require_roles
from jobboard.services.auth.identity import Identity
from jobboard.services.job_service import JobService

router = APIRouter()
alumni_service = AlumniService()
job_service = JobService()

alumni_required = require_roles(UserRole.alumni)


@router.get("/profile")
async def get_profile(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    return await alumni_service.get_profile(current_user, db)


@router.put("/profile")
async def update_profile(
    data: AlumniProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    return await alumni_service.upsert_profile(current_user, data.model_dump(exclude_none=True), db)


@router.post("/company")
async def create_or_update_company(
    data: CompanyUpsert,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    # only fields present in the body are written
    return await alumni_service.create_or_update_company(current_user, data.model_dump(exclude_unset=True), db)


@router.get("/companies")
async def list_companies(db: AsyncSession = Depends(get_db)):
    return await alumni_service.list_companies(db)


@router.get("/jobs")
async def get_my_jobs(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    """Alias of /job/get-my-jobs"""
    return await job_service.get_my_jobs(current_user, db)


@router.get("/dashboard")
async def dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(alumni_required)
):
    return await alumni_service.get_dashboard(current_user, db)


@router.get("/profile/{user_id}")
async def get_public_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await alumni_service.get_public_profile(user_id, db)
