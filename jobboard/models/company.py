from sqlalchemy import Column, String, Text, Enum as SqlEnum, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from jobboard.db.base import Base
from jobboard.models._mixins import generate_uuid, utcnow
import enum


class CompanyStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Company(Base):
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    # one company per alumni
    alumni_id = Column(String(36), ForeignKey("alumni_profiles.id", ondelete="CASCADE"),
                       nullable=False, unique=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(140), nullable=True)
    website = Column(Text, nullable=True)
    industry = Column(String(100), nullable=True)
    company_size = Column(String(50), nullable=True)
    about = Column(Text, nullable=True)
    document_url = Column(Text, nullable=True)
    status = Column(SqlEnum(CompanyStatus, name="companystatus"), nullable=False,
                    default=CompanyStatus.pending)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    alumni = relationship("AlumniProfile", foreign_keys=[alumni_id])
