from sqlalchemy import Column, String, Integer, Float, Text, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from jobboard.db.base import Base
from jobboard.models._mixins import generate_uuid, utcnow


class StudentProfile(Base):
    __tablename__ = "student_profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"),
                     nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    student_id = Column(String(50), nullable=False)
    branch = Column(String(100), nullable=False)
    grad_year = Column(Integer, nullable=False)
    skills = Column(JSON, nullable=True)  # list of strings
    resume_url = Column(Text, nullable=True)
    phone = Column(String(20), nullable=True)
    cgpa = Column(Float, nullable=True)
    # desired_roles, preferred_locations, work_mode
    preferences = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", foreign_keys=[user_id])


class AlumniProfile(Base):
    __tablename__ = "alumni_profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"),
                     nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    grad_year = Column(Integer, nullable=True)
    current_title = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", foreign_keys=[user_id])
