# educonnect/models/review.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    id: int
    course_id: int
    student_id: int
    rating: int = Field(..., ge=1, le=5)
    review_text: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(frozen=True)


class ReviewCreate(BaseModel):
    course_id: int
    student_id: int
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    review_text: Optional[str] = Field(None, max_length=1000)

    model_config = ConfigDict(extra="forbid")
