from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from jobboard.schemas.log import LogSchema
from typing import List
from jobboard.db.database import get_db
from jobboard.services.admin_service import AdminService
from jobboard.services.auth.auth_service import require_roles
from jobboard.models.user import UserRole

router = APIRouter()
admin_service = AdminService()


@router.get("", response_model=List[LogSchema])
async def get_logs(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user=Depends(require_roles(UserRole.admin))
):
    return await admin_service.get_logs(db, skip=skip, limit=limit)
