from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone
from jobboard.models import Log
from jobboard.db.database import AsyncSessionLocal
from typing import Optional
import logging

logger = logging.getLogger(__name__)


async def log_major_event(action: str, status: str, user: Optional[str], details: Optional[str] = None,
                          entity: Optional[str] = None, source: Optional[str] = None):
    """
    Persist a major event to the activity log in its own session.
    A failed write is logged and swallowed; the caller's request carries on.
    """
    logger.info("event action=%s status=%s user=%s entity=%s", action, status, user, entity)

    async with AsyncSessionLocal() as session:
        try:
            log_entry = {
                'timestamp': datetime.now(timezone.utc),
                'action': action,
                'status': status,
                'details': details,
                'user': user,
                'entity': entity,
                'source': source
            }
            await session.execute(insert(Log), [log_entry])
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            logger.exception("Failed to persist activity log for action=%s", action)
