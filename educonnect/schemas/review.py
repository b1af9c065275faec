# educonnect/schemas/review.py
"""
Review Pydantic Schemas
Request/response models with validation
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ======================
# REVIEW SCHEMAS
# ======================

class ReviewCreateRequest(BaseModel):
    """Schema for submitting a review; the student is the current user"""
    course_id: int = Field(..., description="Course identifier")
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    review_text: Optional[str] = Field(None, max_length=1000, description="Review text (max 1000 chars)")

    @field_validator("review_text")
    @classmethod
    def validate_review_text(cls, v):
        """Blank text is stored as no text"""
        if v is None:
            return None
        return v.strip() or None


class ReviewResponse(BaseModel):
    id: int
    course_id: int
    student_id: int
    rating: int
    review_text: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewWithStudent(ReviewResponse):
    student_name: str = Field(..., description="Reviewer name")


class ReviewSubmitResponse(ReviewResponse):
    """Response after submitting a review"""
    average_rating: float = Field(..., description="Course's updated average rating")


class ReviewDeleteResponse(BaseModel):
    review_id: int
    course_id: int
    average_rating: float
    message: str


class RatingRecalculationResponse(BaseModel):
    """Response after recalculating all ratings"""
    total_courses: int = Field(..., description="Total courses processed")
    updated_count: int = Field(..., description="Successfully updated count")
    message: str
