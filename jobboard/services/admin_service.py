import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.exceptions import NotFoundError, ValidationError
from jobboard.db.database import datastore_errors
from jobboard.models.company import CompanyStatus
from jobboard.models.log import Log
from jobboard.models.profile import AlumniProfile
from jobboard.models.user import User, UserRole, UserStatus
from jobboard.repositories import user_repo
from jobboard.repositories.company_repo import CompanyRepository
from jobboard.repositories.job_repo import JobRepository
from jobboard.repositories.notification_repo import NotificationRepository
from jobboard.repositories.profile_repo import get_alumni_profile_by_id
from jobboard.services.alumni_service import serialize_alumni_profile
from jobboard.services.auth.auth_service import serialize_user
from jobboard.services.auth.identity import Identity
from jobboard.services.dashboard_service import get_admin_dashboard
from jobboard.services.job_service import serialize_public_job
from jobboard.services.logging import log_major_event
from jobboard.services.notification_service import get_notification_service, notify_safely

logger = logging.getLogger(__name__)

VERIFY_STATUSES = ("approved", "rejected")
ADMIN_SETTABLE_STATUSES = ("approved", "rejected", "pending", "inactive")
NOTIFY_ROLES = ("student", "alumni")
DEFAULT_NOTIFICATION_TITLE = "Notification from Admin"


class AdminService:
    async def get_pending_alumni(self, db: AsyncSession) -> dict:
        result = await db.execute(
            select(User, AlumniProfile)
            .outerjoin(AlumniProfile, AlumniProfile.user_id == User.id)
            .where(User.role == UserRole.alumni, User.status == UserStatus.pending)
            .order_by(User.created_at.desc())
        )
        pending = []
        for user, profile in result.all():
            item = serialize_user(user)
            item["alumni_profile"] = serialize_alumni_profile(profile)
            pending.append(item)
        return {"success": True, "count": len(pending), "alumni": pending}

    async def verify_alumni(self, admin: Identity, user_id: str, status: Optional[str], db: AsyncSession) -> dict:
        if status not in VERIFY_STATUSES:
            raise ValidationError("Invalid status")
        user = await user_repo.get_user_by_id(db, user_id)
        if not user or user.role != UserRole.alumni:
            raise NotFoundError("Alumni not found")

        async with datastore_errors(db):
            user.status = UserStatus(status)
            user.is_verified = status == "approved"
            await db.commit()

        await notify_safely(get_notification_service().send_alumni_status_email, user.email, status)
        await log_major_event(action="alumni_verified", status=status, user=admin.id,
                              entity=user_id, source="admin_service")
        return {"success": True, "message": f"Alumni {status}"}

    async def set_company_status(self, admin: Identity, company_id: str, approve: bool, db: AsyncSession) -> dict:
        """Approve or reject a company; the owning alumni account follows the same decision."""
        company = await CompanyRepository.get_by_id(db, company_id)
        if not company:
            raise NotFoundError("Company not found")
        profile = await get_alumni_profile_by_id(db, company.alumni_id)
        owner = await user_repo.get_user_by_id(db, profile.user_id) if profile else None
        if not owner:
            raise NotFoundError("Alumni not found")

        async with datastore_errors(db):
            company.status = CompanyStatus.approved if approve else CompanyStatus.rejected
            owner.status = UserStatus.approved if approve else UserStatus.rejected
            if approve:
                owner.is_verified = True
            await db.commit()

        if approve:
            await notify_safely(get_notification_service().send_company_approved_email, owner.email)
        await log_major_event(action="company_approved" if approve else "company_rejected",
                              status="success", user=admin.id, entity=company_id, source="admin_service")
        verdict = "approved" if approve else "rejected"
        return {"success": True, "message": f"Alumni & company {verdict} successfully"}

    async def list_jobs(self, db: AsyncSession) -> dict:
        jobs = await JobRepository.list_jobs(db)
        data = [serialize_public_job(job) for job in jobs]
        return {"success": True, "count": len(data), "jobs": data}

    async def delete_job(self, admin: Identity, job_id: str, db: AsyncSession) -> dict:
        if not await JobRepository.get_by_id(db, job_id):
            raise NotFoundError("Job not found")
        async with datastore_errors(db, "Failed to delete job"):
            await JobRepository.delete_job(db, job_id)
        await log_major_event(action="job_deleted", status="success", user=admin.id,
                              entity=job_id, source="admin_service")
        return {"success": True, "message": "Job deleted successfully"}

    async def list_users(self, db: AsyncSession) -> dict:
        return {
            "success": True,
            "students": [serialize_user(u) for u in await user_repo.get_users_by_role(db, UserRole.student)],
            "alumni": [serialize_user(u) for u in await user_repo.get_users_by_role(db, UserRole.alumni)],
            "admins": [serialize_user(u) for u in await user_repo.get_users_by_role(db, UserRole.admin)],
        }

    async def update_user_status(self, admin: Identity, user_id: str, status: Optional[str],
                                 db: AsyncSession) -> dict:
        if status not in ADMIN_SETTABLE_STATUSES:
            raise ValidationError("Invalid status value")
        user = await user_repo.get_user_by_id(db, user_id)
        if not user:
            raise NotFoundError("User not found")

        async with datastore_errors(db):
            user.status = UserStatus(status)
            user.is_verified = status == "approved"
            await db.commit()

        await log_major_event(action="user_status_changed", status=status, user=admin.id,
                              entity=user_id, source="admin_service")
        return {"success": True, "message": "User status updated", "status": status}

    async def delete_user(self, admin: Identity, user_id: str, db: AsyncSession) -> dict:
        if user_id == admin.id:
            raise ValidationError("Admins cannot delete their own account")
        if not await user_repo.get_user_by_id(db, user_id):
            raise NotFoundError("User not found")
        async with datastore_errors(db, "Failed to delete user"):
            await user_repo.delete_user(db, user_id)
        await log_major_event(action="user_deleted", status="success", user=admin.id,
                              entity=user_id, source="admin_service")
        return {"success": True, "message": "User deleted successfully"}

    async def send_notification(self, admin: Identity, message: Optional[str], target_role: Optional[str],
                                title: Optional[str], db: AsyncSession) -> dict:
        """Store one in-app notification per recipient and email each of them."""
        if not message or not message.strip() or target_role not in NOTIFY_ROLES:
            raise ValidationError("message and target_role ('student'|'alumni') required")
        title = (title or "").strip() or DEFAULT_NOTIFICATION_TITLE

        recipients = await user_repo.get_users_by_role(db, UserRole(target_role))
        async with datastore_errors(db, "Failed to store notifications"):
            await NotificationRepository.bulk_create(db, [u.id for u in recipients], title, message.strip())

        service = get_notification_service()
        emailed = 0
        for recipient in recipients:
            if await notify_safely(service.send_admin_notification, recipient.email, title, message.strip()):
                emailed += 1

        await log_major_event(action="broadcast_sent", status="success", user=admin.id,
                              details=f"{len(recipients)} recipients, {emailed} emailed",
                              entity=target_role, source="admin_service")
        return {
            "success": True,
            "message": f"Notifications sent to {len(recipients)} {target_role}(s)",
            "recipients": len(recipients),
            "emailed": emailed,
        }

    async def get_dashboard(self, db: AsyncSession) -> dict:
        return await get_admin_dashboard(db)

    async def get_logs(self, db: AsyncSession, skip: int = 0, limit: int = 50):
        stmt = select(Log).order_by(Log.timestamp.desc(), Log.id.desc()).offset(skip).limit(limit)
        result = await db.execute(stmt)
        return result.scalars().all()
