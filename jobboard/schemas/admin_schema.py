from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class VerifyAlumniRequest(BaseModel):
    status: Optional[str] = None


class UserStatusUpdate(BaseModel):
    status: Optional[str] = None


class NotifyRequest(BaseModel):
    message: Optional[str] = None
    target_role: Optional[str] = Field(None, alias="targetRole")
    title: Optional[str] = Field(None, max_length=120)

    model_config = ConfigDict(populate_by_name=True)
