from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from jobboard.db.base import Base
from jobboard.models._mixins import utcnow


class JobApplication(Base):
    __tablename__ = "job_applications"

    # composite key doubles as the one-application-per-user-per-job constraint
    job_id = Column(String(36), ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    resume_url = Column(Text, nullable=True)
    # total applications for job_id, rewritten on every row after each insert/delete
    applicant_count = Column(Integer, nullable=False, default=0)
    applied_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    job = relationship("Job", foreign_keys=[job_id])
    user = relationship("User", foreign_keys=[user_id])
