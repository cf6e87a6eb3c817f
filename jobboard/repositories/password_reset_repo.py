from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, select

from jobboard.models.password_reset_token import PasswordResetToken


async def clear_unused_tokens(db, user_id: str) -> None:
    await db.execute(
        delete(PasswordResetToken).where(
            PasswordResetToken.user_id == user_id,
            PasswordResetToken.used == False,  # noqa: E712
        )
    )


async def create_token(db, user_id: str, token_hash: str, expire_minutes: int) -> PasswordResetToken:
    token = PasswordResetToken(
        user_id=user_id,
        token_hash=token_hash,
        expires_at=datetime.now(timezone.utc) + timedelta(minutes=expire_minutes),
        used=False,
    )
    db.add(token)
    await db.commit()
    await db.refresh(token)
    return token


async def delete_token_by_hash(db, token_hash: str) -> None:
    await db.execute(delete(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash))
    await db.commit()


async def get_latest_valid_token(db, user_id: str) -> Optional[PasswordResetToken]:
    result = await db.execute(
        select(PasswordResetToken)
        .where(
            PasswordResetToken.user_id == user_id,
            PasswordResetToken.used == False,  # noqa: E712
            PasswordResetToken.expires_at > datetime.now(timezone.utc),
        )
        .order_by(PasswordResetToken.created_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()
