from pydantic import BaseModel, Field, field_validator
from typing import Optional


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = Field(None, max_length=255)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip() if v else v


class UserRegister(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = Field(None, max_length=255)
    role: Optional[str] = None
    name: Optional[str] = Field(None, max_length=255)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip() if v else v

    @field_validator('role')
    @classmethod
    def normalize_role(cls, v):
        # password and role rules live in InputValidator so both signup paths share them
        return v.lower().strip() if v else v


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    uid: Optional[str] = None
    token: Optional[str] = None
    new_password: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None
