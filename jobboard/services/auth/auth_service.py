from jobboard.models.user import User, UserRole, UserStatus
from jobboard.models.profile import AlumniProfile
from jobboard.models.revoked_token import RevokedToken
from jobboard.core.security import (
    verify_password, get_password_hash, create_access_token,
    generate_reset_token, hash_reset_token, verify_reset_token,
)
from jobboard.core.config import settings
from jobboard.core.exceptions import (
    ConflictError, ForbiddenError, NotFoundError, UnauthenticatedError, ValidationError,
)
from jobboard.core.validators import InputValidator
from jobboard.repositories.user_repo import get_user_by_email, get_user_by_id, create_user
from jobboard.repositories import password_reset_repo
from jobboard.repositories.profile_repo import get_alumni_profile, get_student_profile
from jobboard.services.auth.AuthInterface import IAuthService
from jobboard.services.auth.identity import Identity, SELF_ISSUED, resolve_identity
from jobboard.services.notification_service import get_notification_service, notify_safely
from jobboard.services.student_service import StudentService, serialize_student_profile
from jobboard.services.alumni_service import AlumniService, serialize_alumni_profile
from jobboard.db.database import get_db
from datetime import datetime, timezone
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from urllib.parse import quote
import logging

logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = "If this email exists, a reset link has been sent."

# yields None when the header is missing; get_current_user turns that into 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

SELF_REGISTRATION_ROLES = (UserRole.student, UserRole.alumni)


def serialize_user(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role.value,
        "status": user.status.value if user.status else None,
        "is_verified": bool(user.is_verified),
    }


class AuthService(IAuthService):
    async def login(self, email: str, password: str, db):
        email = InputValidator.validate_email(email)
        if not password or not password.strip():
            raise ValidationError("Password is required")

        user = await get_user_by_email(db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Login failed for %s", email)
            raise UnauthenticatedError("Invalid credentials")
        if user.status == UserStatus.inactive:
            raise ForbiddenError("Account is inactive")

        user.last_login_at = datetime.now(timezone.utc)
        await db.commit()

        token = create_access_token(user.id, user.email, user.role.value)
        return {
            "success": True,
            "token": token,
            "role": user.role.value,
            "user": serialize_user(user),
        }

    async def signup(self, data: dict, db):
        email = InputValidator.validate_email(data.get("email"))
        password = InputValidator.validate_password(data.get("password"))
        name = InputValidator.clean_text(data.get("name"), max_length=255, field="name")

        try:
            role = UserRole(str(data.get("role") or "").lower())
        except ValueError:
            raise ValidationError("Invalid or missing role for signup")
        if role not in SELF_REGISTRATION_ROLES:
            raise ValidationError("Invalid or missing role for signup")

        if await get_user_by_email(db, email):
            raise ConflictError("User already exists")

        # alumni wait for admin verification; students can use the board straight away
        status = UserStatus.pending if role == UserRole.alumni else UserStatus.active
        user = await create_user(
            db, email=email, password_hash=get_password_hash(password),
            role=role, status=status, commit=False,
        )
        if role == UserRole.alumni:
            db.add(AlumniProfile(user_id=user.id, name=name or email.split("@")[0]))
        await db.commit()
        await db.refresh(user)
        logger.info("Registered %s user %s", role.value, user.id)
        return {"success": True, "user": serialize_user(user)}

    async def logout(self, identity: Identity, db):
        # provider-issued sessions are ended on the provider side
        if identity.source == SELF_ISSUED and identity.jti:
            db.add(RevokedToken(jti=identity.jti))
            await db.commit()
        return {"success": True, "message": "Successfully logged out."}

    async def get_profile(self, identity: Identity, db):
        user = await get_user_by_id(db, identity.id)
        if not user:
            raise NotFoundError("User not found")

        profile = None
        if user.role == UserRole.student:
            profile = serialize_student_profile(await get_student_profile(db, user.id))
        elif user.role == UserRole.alumni:
            profile = serialize_alumni_profile(await get_alumni_profile(db, user.id))

        return {"success": True, "user": serialize_user(user), "profile": profile}

    async def update_profile(self, identity: Identity, data: dict, db):
        if identity.role == UserRole.student:
            return await StudentService().upsert_profile(identity, data, db)
        if identity.role == UserRole.alumni:
            return await AlumniService().upsert_profile(identity, data, db)
        raise ValidationError("Admin accounts have no profile to update")

    async def forgot_password(self, email: str, db):
        email = InputValidator.validate_email(email)
        user = await get_user_by_email(db, email)
        if not user:
            return {"success": True, "message": GENERIC_RESET_MESSAGE}

        await password_reset_repo.clear_unused_tokens(db, user.id)
        plain_token = generate_reset_token()
        token_hash = hash_reset_token(plain_token)
        await password_reset_repo.create_token(
            db, user.id, token_hash, settings.RESET_TOKEN_EXPIRE_MINUTES
        )

        reset_link = (
            f"{settings.FRONTEND_URL.rstrip('/')}/reset-password"
            f"?token={quote(plain_token)}&uid={quote(user.id)}"
        )
        sent = await notify_safely(
            get_notification_service().send_password_reset_email,
            user.email, reset_link, settings.RESET_TOKEN_EXPIRE_MINUTES,
        )
        if not sent:
            # an unreachable link is useless; drop the token we just issued
            await password_reset_repo.delete_token_by_hash(db, token_hash)

        return {"success": True, "message": GENERIC_RESET_MESSAGE}

    async def reset_password(self, user_id: str, token: str, new_password: str, db):
        new_password = InputValidator.validate_password(new_password, field="New password")
        if not user_id or not token:
            raise ValidationError("uid, token and new_password are required")

        record = await password_reset_repo.get_latest_valid_token(db, user_id)
        if not record or not verify_reset_token(token, record.token_hash):
            raise ValidationError("Invalid or expired token")

        user = await get_user_by_id(db, user_id)
        if not user:
            raise ValidationError("Invalid or expired token")

        user.password_hash = get_password_hash(new_password)
        record.used = True
        await db.commit()
        return {"success": True, "message": "Password reset successful"}

    async def change_password(self, identity: Identity, current_password: str, new_password: str, db):
        if not current_password or not str(current_password).strip():
            raise ValidationError("current_password and new_password required")
        new_password = InputValidator.validate_password(new_password, field="New password")

        user = await get_user_by_id(db, identity.id)
        if not user:
            raise NotFoundError("User not found")
        if not verify_password(current_password, user.password_hash):
            raise UnauthenticatedError("Invalid credentials")

        user.password_hash = get_password_hash(new_password)
        await db.commit()
        return {"success": True, "message": "Password changed successfully"}


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> Identity:
    if not token:
        raise UnauthenticatedError("Missing Bearer token")
    identity = await resolve_identity(token, db)
    if identity is None:
        raise UnauthenticatedError("Invalid authentication credentials")
    if not await get_user_by_id(db, identity.id):
        raise UnauthenticatedError("User no longer exists")
    return identity


def role_allowed(role, allowed) -> bool:
    return role in allowed


def require_roles(*roles: UserRole):
    """Dependency factory: the authenticated identity if its role is allowed, else 403."""
    allowed = frozenset(roles)

    async def dependency(current_user: Identity = Depends(get_current_user)) -> Identity:
        if not role_allowed(current_user.role, allowed):
            names = "/".join(sorted(r.value for r in allowed))
            raise ForbiddenError(f"Forbidden: {names} access required")
        return current_user

    return dependency
