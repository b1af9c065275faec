# educonnect/models/notification.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Notification(BaseModel):
    id: int
    user_id: int
    message: str
    type: str
    related_id: Optional[int] = None
    is_read: bool = False
    created_at: datetime

    model_config = ConfigDict(frozen=True)


class NotificationCreate(BaseModel):
    user_id: int
    message: str = Field(..., min_length=1, max_length=500)
    type: str = Field(..., min_length=1, max_length=50)
    related_id: Optional[int] = None

    model_config = ConfigDict(extra="forbid")


class NotificationPatch(BaseModel):
    is_read: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")
