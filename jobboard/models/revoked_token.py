from sqlalchemy import Column, Integer, String, DateTime
from jobboard.db.base import Base
from jobboard.models._mixins import utcnow


class RevokedToken(Base):
    __tablename__ = "revoked_tokens"
    id = Column(Integer, primary_key=True, index=True)
    jti = Column(String, unique=True, index=True, nullable=False)
    revoked_at = Column(DateTime(timezone=True), default=utcnow)
