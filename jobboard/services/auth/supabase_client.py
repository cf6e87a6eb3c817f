import logging
from typing import Any, Dict, Optional

import httpx

from jobboard.core.config import settings

logger = logging.getLogger(__name__)


def provider_enabled() -> bool:
    return bool(settings.SUPABASE_URL and settings.SUPABASE_ANON_KEY)


async def fetch_provider_user(token: str) -> Optional[Dict[str, Any]]:
    """Resolve a Supabase access token to its user object, or None if rejected."""
    if not provider_enabled():
        return None

    url = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/user"
    headers = {
        "Authorization": f"Bearer {token}",
        "apikey": settings.SUPABASE_ANON_KEY,
    }
    try:
        async with httpx.AsyncClient(timeout=settings.SUPABASE_TIMEOUT_SECONDS) as client:
            response = await client.get(url, headers=headers)
    except httpx.RequestError as exc:
        logger.warning("Supabase token introspection failed: %s", exc)
        return None

    if response.status_code != 200:
        return None
    payload = response.json()
    if not isinstance(payload, dict) or not payload.get("id"):
        return None
    return payload
