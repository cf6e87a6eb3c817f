from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class LogSchema(BaseModel):
    id: Optional[int] = None
    timestamp: datetime
    action: str
    status: str
    details: Optional[str] = None
    user: Optional[str] = None
    entity: Optional[str] = None
    source: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
