"""
Identity Gateway: turns a bearer token into one normalized identity.

Two token schemes are accepted and tried in a fixed order, once each:
tokens signed by this service, then Supabase access tokens resolved through
the provider. Results are never cached between requests.
"""
import logging
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from jobboard.core.security import decode_token, get_password_hash
from jobboard.models.revoked_token import RevokedToken
from jobboard.models.user import User, UserRole, UserStatus
from jobboard.repositories.user_repo import create_user, get_user_by_email, get_user_by_id
from jobboard.services.auth import supabase_client

logger = logging.getLogger(__name__)

SELF_ISSUED = "self_issued"
IDENTITY_PROVIDER = "identity_provider"


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    role: UserRole
    source: str
    jti: Optional[str] = None


class TokenStrategy(ABC):
    name: str

    @abstractmethod
    async def verify(self, token: str, db: AsyncSession) -> Optional[Identity]:
        """Return the caller's identity, or None if this scheme does not accept the token."""


class SelfIssuedTokenStrategy(TokenStrategy):
    name = SELF_ISSUED

    async def verify(self, token: str, db: AsyncSession) -> Optional[Identity]:
        payload = decode_token(token)
        if not payload or not payload.get("userId"):
            return None
        try:
            role = UserRole(payload.get("role"))
        except ValueError:
            return None

        jti = payload.get("jti")
        if jti:
            result = await db.execute(select(RevokedToken).where(RevokedToken.jti == jti))
            if result.scalar_one_or_none():
                return None

        return Identity(
            id=payload["userId"],
            email=payload.get("email") or payload.get("sub"),
            role=role,
            source=self.name,
            jti=jti,
        )


class IdentityProviderTokenStrategy(TokenStrategy):
    name = IDENTITY_PROVIDER

    async def verify(self, token: str, db: AsyncSession) -> Optional[Identity]:
        provider_user = await supabase_client.fetch_provider_user(token)
        if not provider_user:
            return None
        user = await ensure_app_user(db, provider_user)
        return Identity(id=user.id, email=user.email, role=user.role, source=self.name)


IDENTITY_STRATEGIES: Tuple[TokenStrategy, ...] = (
    SelfIssuedTokenStrategy(),
    IdentityProviderTokenStrategy(),
)


async def resolve_identity(token: str, db: AsyncSession) -> Optional[Identity]:
    for strategy in IDENTITY_STRATEGIES:
        identity = await strategy.verify(token, db)
        if identity is not None:
            return identity
    return None


async def ensure_app_user(db: AsyncSession, provider_user: dict) -> User:
    """The local users row for a provider account, created on first sight."""
    existing = await get_user_by_id(db, provider_user["id"])
    if existing:
        return existing
    email = (provider_user.get("email") or "").lower()
    # an account registered locally first keeps its row
    if email:
        existing = await get_user_by_email(db, email)
        if existing:
            return existing

    metadata = provider_user.get("user_metadata") or {}
    role_hint = str(metadata.get("role") or "").lower()
    role = UserRole(role_hint) if role_hint in (UserRole.student.value, UserRole.alumni.value) else UserRole.student

    logger.info("Creating app user for provider account %s", provider_user["id"])
    return await create_user(
        db,
        email=email,
        # provider accounts never log in with a local password
        password_hash=get_password_hash(secrets.token_urlsafe(24)),
        role=role,
        status=UserStatus.pending,
        is_verified=bool(provider_user.get("email_confirmed_at")),
        user_id=provider_user["id"],
    )
