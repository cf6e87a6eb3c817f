from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from jobboard.db.database import get_db
from jobboard.models.user import UserRole
from jobboard.schemas.admin_schema import NotifyRequest, UserStatusUpdate, VerifyAlumniRequest
from jobboard.services.admin_service import AdminService
from jobboard.services.auth.auth_service import require_roles
from jobboard.services.auth.identity import Identity

admin_service = AdminService()
admin_required = require_roles(UserRole.admin)
# every route here is admin only
router = APIRouter(dependencies=[Depends(admin_required)])


@router.get("/alumni/pending")
async def get_pending_alumni(db: AsyncSession = Depends(get_db)):
    return await admin_service.get_pending_alumni(db)


@router.put("/alumni/verify/{user_id}")
async def verify_alumni(
    user_id: str,
    data: VerifyAlumniRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(admin_required)
):
    return await admin_service.verify_alumni(current_user, user_id, data.status, db)


@router.patch("/companies/{company_id}/approve")
async def approve_company(
    company_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(admin_required)
):
    return await admin_service.set_company_status(current_user, company_id, True, db)


@router.patch("/companies/{company_id}/reject")
async def reject_company(
    company_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(admin_required)
):
    return await admin_service.set_company_status(current_user, company_id, False, db)


@router.get("/jobs")
async def get_all_jobs(db: AsyncSession = Depends(get_db)):
    return await admin_service.list_jobs(db)


@router.delete("/jobs/{job_id}")
async def delete_job(
    job_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(admin_required)
):
    return await admin_service.delete_job(current_user, job_id, db)


@router.get("/users")
async def get_all_users(db: AsyncSession = Depends(get_db)):
    return await admin_service.list_users(db)


@router.put("/users/{user_id}/status")
async def update_user_status(
    user_id: str,
    data: UserStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(admin_required)
):
    return await admin_service.update_user_status(current_user, user_id, data.status, db)


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(admin_required)
):
    return await admin_service.delete_user(current_user, user_id, db)


@router.post("/notify")
async def send_notification(
    data: NotifyRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(admin_required)
):
    return await admin_service.send_notification(current_user, data.message, data.target_role, data.title, db)


@router.get("/dashboard")
async def dashboard(db: AsyncSession = Depends(get_db)):
    return await admin_service.get_dashboard(db)


@router.get("/analytics")
async def analytics(db: AsyncSession = Depends(get_db)):
    """Alias of /dashboard"""
    return await admin_service.get_dashboard(db)
