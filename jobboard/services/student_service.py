import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.exceptions import NotFoundError, ValidationError
from jobboard.core.validators import InputValidator
from jobboard.models.messaging import ConnectionStatus
from jobboard.models.profile import StudentProfile
from jobboard.repositories.job_application_repo import JobApplicationRepository
from jobboard.repositories.messaging_repo import ConnectionRepository
from jobboard.repositories.profile_repo import apply_updates, get_student_profile
from jobboard.services.auth.identity import Identity

logger = logging.getLogger(__name__)

REQUIRED_ON_CREATE = ("name", "student_id", "branch", "grad_year")
OPTIONAL_FIELDS = ("resume_url", "phone", "cgpa")
PREFERENCE_FIELDS = ("desired_roles", "preferred_locations", "work_mode")


def serialize_student_profile(profile: Optional[StudentProfile]) -> Optional[dict]:
    if profile is None:
        return None
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "name": profile.name,
        "student_id": profile.student_id,
        "branch": profile.branch,
        "grad_year": profile.grad_year,
        "skills": profile.skills or [],
        "resume_url": profile.resume_url,
        "phone": profile.phone,
        "cgpa": profile.cgpa,
        "preferences": profile.preferences or {},
        "created_at": profile.created_at,
    }


def _collect_updates(data: dict) -> dict:
    update_data = {}
    for field in REQUIRED_ON_CREATE + OPTIONAL_FIELDS:
        value = data.get(field)
        if value is None:
            continue
        if isinstance(value, str):
            value = InputValidator.clean_text(value, max_length=None if field == "resume_url" else 255, field=field)
        update_data[field] = value

    if data.get("skills") is not None:
        update_data["skills"] = InputValidator.normalize_skills(data["skills"])

    preferences = {k: data[k] for k in PREFERENCE_FIELDS if data.get(k) is not None}
    if preferences:
        update_data["preferences"] = preferences
    return update_data


class StudentService:
    async def get_profile(self, identity: Identity, db: AsyncSession) -> dict:
        profile = await get_student_profile(db, identity.id)
        return {"success": True, "exists": profile is not None, "profile": serialize_student_profile(profile)}

    async def upsert_profile(self, identity: Identity, data: dict, db: AsyncSession) -> dict:
        """Create the profile on first save, partial update afterwards."""
        update_data = _collect_updates(data)
        if not update_data:
            raise ValidationError("No profile fields to update")

        profile = await get_student_profile(db, identity.id)
        if profile is None:
            missing = [f for f in REQUIRED_ON_CREATE if not update_data.get(f)]
            if missing:
                raise ValidationError(f"Missing required fields: {', '.join(missing)}")
            profile = StudentProfile(user_id=identity.id, **update_data)
            db.add(profile)
            message = "Student profile created"
        else:
            if "preferences" in update_data:
                # merge so one preference can change without resending the rest
                update_data["preferences"] = {**(profile.preferences or {}), **update_data["preferences"]}
            apply_updates(profile, update_data)
            message = "Student profile updated"

        await db.commit()
        await db.refresh(profile)
        logger.info("%s for user %s", message, identity.id)
        return {"success": True, "message": message, "profile": serialize_student_profile(profile)}

    async def get_dashboard(self, identity: Identity, db: AsyncSession) -> dict:
        profile = await get_student_profile(db, identity.id)
        applications_count = await JobApplicationRepository.count_for_user(db, identity.id)

        quick_actions = []
        if not profile or not profile.resume_url:
            quick_actions.append({"label": "Upload Resume", "to": "/student/profile"})
        if not profile or not profile.skills:
            quick_actions.append({"label": "Add Skills", "to": "/student/profile"})
        quick_actions.append({"label": "Browse Jobs", "to": "/jobs"})
        if applications_count:
            quick_actions.append({"label": "View Applications", "to": "/student/applications"})

        timeline = []
        if profile and profile.created_at:
            timeline.append({"title": "Profile created", "date": profile.created_at, "status": "completed"})
        if applications_count:
            first_applied = await JobApplicationRepository.first_application_date(db, identity.id)
            if first_applied:
                timeline.append({"title": "First application submitted", "date": first_applied,
                                 "status": "completed"})

        return {
            "success": True,
            "profile": serialize_student_profile(profile),
            "applications_count": applications_count,
            "quick_actions": quick_actions,
            "timeline": timeline,
        }

    async def get_public_profile(self, identity: Identity, user_id: str, db: AsyncSession) -> dict:
        profile = await get_student_profile(db, user_id)
        if not profile:
            raise NotFoundError("Profile not found")
        connection = await ConnectionRepository.find_between(
            db, identity.id, user_id, status=ConnectionStatus.accepted
        )
        public = serialize_student_profile(profile)
        public.pop("phone", None)
        public["is_connected"] = connection is not None
        return {"success": True, "profile": public}
