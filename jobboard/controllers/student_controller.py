from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from jobboard.db.database import get_db
from jobboard.models.user import UserRole
from jobboard.schemas.profile_schema import StudentProfileUpdate
from jobboard.services.auth.auth_service import get_current_user, require_roles
from jobboard.services.auth.identity import Identity
from jobboard.services.student_service import StudentService

router = APIRouter()
student_service = StudentService()

student_required = require_roles(UserRole.student)


@router.get("/profile")
async def get_profile(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(student_required)
):
    return await student_service.get_profile(current_user, db)


@router.put("/profile")
async def upsert_profile(
    data: StudentProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(student_required)
):
    return await student_service.upsert_profile(current_user, data.model_dump(exclude_none=True), db)


@router.get("/dashboard")
async def dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(student_required)
):
    return await student_service.get_dashboard(current_user, db)


@router.get("/profile/{user_id}")
async def get_public_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await student_service.get_public_profile(current_user, user_id, db)
