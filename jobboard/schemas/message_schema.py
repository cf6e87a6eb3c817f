from pydantic import BaseModel, Field
from typing import Optional


class ConnectionRequest(BaseModel):
    receiver_id: Optional[str] = None


class MessageCreate(BaseModel):
    receiver_id: Optional[str] = None
    content: Optional[str] = Field(None, max_length=5000)
