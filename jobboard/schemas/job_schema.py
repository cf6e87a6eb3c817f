from pydantic import BaseModel, Field
from typing import Optional


class JobCreate(BaseModel):
    job_title: Optional[str] = Field(None, max_length=255, description="Job title")
    job_description: Optional[str] = Field(None, max_length=10000, description="Job description")


class JobUpdate(BaseModel):
    job_title: Optional[str] = Field(None, max_length=255)
    job_description: Optional[str] = Field(None, max_length=10000)


class ApplyJobRequest(BaseModel):
    job_id: Optional[str] = None
    # defaults to the resume on the student's profile
    resume_url: Optional[str] = None
