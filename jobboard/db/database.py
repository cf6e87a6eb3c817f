import logging
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from jobboard.core.config import settings
from jobboard.core.exceptions import InternalError

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL
IS_SQLITE = DATABASE_URL.startswith("sqlite")

# aiosqlite connections are tied to the loop that opened them
engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    future=True,
    **({"poolclass": NullPool} if IS_SQLITE else {"pool_pre_ping": True}),
)

if IS_SQLITE:
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

AsyncSessionLocal = sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Dependency for FastAPI routes


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def datastore_errors(db: AsyncSession, message: str = "Internal server error"):
    """Roll back and surface datastore failures as a generic InternalError."""
    try:
        yield
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(message)
        raise InternalError(message)
