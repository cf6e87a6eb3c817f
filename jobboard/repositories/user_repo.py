from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.future import select

from jobboard.models.user import User, UserRole, UserStatus


async def get_user_by_email(db, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(db, user_id: str) -> Optional[User]:
    """Get user by id"""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def create_user(db, email: str, password_hash: str, role: UserRole,
                      status: UserStatus = UserStatus.pending, is_verified: bool = False,
                      user_id: Optional[str] = None, commit: bool = True) -> User:
    """Create a new user. With commit=False the row is only flushed."""
    new_user = User(
        email=email,
        password_hash=password_hash,
        role=role,
        status=status,
        is_verified=is_verified,
    )
    if user_id:
        new_user.id = user_id
    db.add(new_user)
    if commit:
        await db.commit()
        await db.refresh(new_user)
    else:
        await db.flush()
    return new_user


async def get_users_by_role(db, role: UserRole) -> List[User]:
    result = await db.execute(select(User).where(User.role == role).order_by(User.created_at))
    return result.scalars().all()


async def delete_user(db, user_id: str) -> None:
    # profiles, companies, jobs and applications go with it (ON DELETE CASCADE)
    await db.execute(delete(User).where(User.id == user_id))
    await db.commit()
