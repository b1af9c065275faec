# educonnect/models/user.py
import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, enum.Enum):
    STUDENT = "Student"
    TUTOR = "Tutor"
    ADMIN = "Admin"


# ---------------- USER RECORD ----------------
class User(BaseModel):
    id: int
    name: str
    email: str
    password_hash: str
    role: UserRole
    is_approved: bool
    created_at: datetime

    model_config = ConfigDict(frozen=True)


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    password_hash: str = Field(..., min_length=1)
    role: UserRole = UserRole.STUDENT

    model_config = ConfigDict(extra="forbid")


class UserPatch(BaseModel):
    """Mutable user fields. Role and email are fixed at registration."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    is_approved: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")
