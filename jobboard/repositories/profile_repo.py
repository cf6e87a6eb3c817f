from typing import Optional

from sqlalchemy.future import select

from jobboard.models.profile import AlumniProfile, StudentProfile


async def get_student_profile(db, user_id: str) -> Optional[StudentProfile]:
    result = await db.execute(select(StudentProfile).where(StudentProfile.user_id == user_id))
    return result.scalar_one_or_none()


async def get_alumni_profile(db, user_id: str) -> Optional[AlumniProfile]:
    result = await db.execute(select(AlumniProfile).where(AlumniProfile.user_id == user_id))
    return result.scalar_one_or_none()


async def get_alumni_profile_by_id(db, profile_id: str) -> Optional[AlumniProfile]:
    result = await db.execute(select(AlumniProfile).where(AlumniProfile.id == profile_id))
    return result.scalar_one_or_none()


def apply_updates(instance, update_data: dict) -> None:
    for k, v in update_data.items():
        setattr(instance, k, v)
