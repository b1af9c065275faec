from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from educonnect.schemas.review import ReviewWithStudent
from educonnect.schemas.user import UserSummary


# ======================
# COURSE REQUEST MODELS
# ======================

class CourseCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    published: bool = True


class CourseUpdateRequest(BaseModel):
    """Partial update; unknown fields (tutor_id, average_rating) are rejected."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    subject: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    published: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")


# ======================
# COURSE RESPONSE MODELS
# ======================

class CourseResponse(BaseModel):
    id: int
    title: str
    description: str
    subject: str
    category: str
    price: float
    tutor_id: int
    average_rating: float
    published: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CourseListItem(CourseResponse):
    """Catalogue entry for the public course list."""
    tutor_name: str
    review_count: int = 0


class CourseDetail(CourseResponse):
    tutor: Optional[UserSummary] = None
    reviews: List[ReviewWithStudent] = []
