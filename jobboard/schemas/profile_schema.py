from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union


class StudentProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    student_id: Optional[str] = Field(None, max_length=50)
    branch: Optional[str] = Field(None, max_length=100)
    grad_year: Optional[int] = Field(None, ge=1950, le=2100)
    # list or comma separated string
    skills: Optional[Union[List[str], str]] = None
    resume_url: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=20)
    cgpa: Optional[float] = Field(None, ge=0, le=10)
    desired_roles: Optional[List[str]] = None
    preferred_locations: Optional[List[str]] = None
    work_mode: Optional[str] = None

    @field_validator('work_mode')
    @classmethod
    def validate_work_mode(cls, v):
        if v is not None and v not in ("remote", "onsite", "hybrid"):
            raise ValueError("work_mode must be remote, onsite or hybrid")
        return v


class AlumniProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    grad_year: Optional[int] = Field(None, ge=1950, le=2100)
    current_title: Optional[str] = Field(None, max_length=255)
    company_name: Optional[str] = Field(None, max_length=140)
    website: Optional[str] = None
    industry: Optional[str] = Field(None, max_length=100)
    company_size: Optional[str] = Field(None, max_length=50)
    about: Optional[str] = None
    document_url: Optional[str] = None


class CompanyUpsert(BaseModel):
    company_name: Optional[str] = Field(None, max_length=140)
    website: Optional[str] = None
    industry: Optional[str] = Field(None, max_length=100)
    company_size: Optional[str] = Field(None, max_length=50)
    about: Optional[str] = None
    document_url: Optional[str] = None
