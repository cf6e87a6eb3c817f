from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from jobboard.db.database import get_db
from jobboard.services.auth.auth_service import get_current_user
from jobboard.services.auth.identity import Identity
from jobboard.services.notification_service import InboxService

router = APIRouter()
inbox_service = InboxService()


@router.get("")
async def list_notifications(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await inbox_service.list_for_user(current_user, db)


@router.put("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await inbox_service.mark_read(current_user, notification_id, db)


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await inbox_service.delete(current_user, notification_id, db)
