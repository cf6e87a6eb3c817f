from sqlalchemy import Column, String, Boolean, Enum as SqlEnum, DateTime
from jobboard.db.base import Base
from jobboard.models._mixins import generate_uuid, utcnow
import enum


class UserRole(str, enum.Enum):
    student = "student"
    alumni = "alumni"
    admin = "admin"


class UserStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    inactive = "inactive"
    active = "active"


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(SqlEnum(UserRole, name="userrole"), nullable=False)
    status = Column(SqlEnum(UserStatus, name="userstatus"), nullable=False, default=UserStatus.pending)
    is_verified = Column(Boolean, nullable=False, default=False)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
