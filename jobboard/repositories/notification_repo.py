from typing import List, Optional

from sqlalchemy import select

from jobboard.models.notification import Notification


class NotificationRepository:
    @staticmethod
    async def bulk_create(db, user_ids: List[str], title: str, message: str) -> List[Notification]:
        notifications = [Notification(user_id=uid, title=title, message=message) for uid in user_ids]
        db.add_all(notifications)
        await db.commit()
        return notifications

    @staticmethod
    async def get_for_user(db, user_id: str) -> List[Notification]:
        result = await db.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
        )
        return result.scalars().all()

    @staticmethod
    async def get_owned(db, notification_id: str, user_id: str) -> Optional[Notification]:
        result = await db.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()
