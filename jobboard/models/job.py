from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from jobboard.db.base import Base
from jobboard.models._mixins import generate_uuid, utcnow


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="CASCADE"),
                        nullable=False, index=True)
    # nullable so deleting the poster's profile keeps the job (ON DELETE SET NULL)
    posted_by_alumni_id = Column(String(36), ForeignKey("alumni_profiles.id", ondelete="SET NULL"),
                                 nullable=True, index=True)
    job_title = Column(String(255), nullable=False)
    job_description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    company = relationship("Company", foreign_keys=[company_id])
    poster = relationship("AlumniProfile", foreign_keys=[posted_by_alumni_id])
