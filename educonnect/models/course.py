# educonnect/models/course.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Course(BaseModel):
    id: int
    title: str
    description: str
    subject: str
    category: str
    price: float
    tutor_id: int
    average_rating: float = 0.0
    published: bool = True
    created_at: datetime

    model_config = ConfigDict(frozen=True)


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    tutor_id: int
    published: bool = True

    model_config = ConfigDict(extra="forbid")


class CoursePatch(BaseModel):
    # average_rating is written back by rating recomputation
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    subject: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    published: Optional[bool] = None
    average_rating: Optional[float] = Field(None, ge=0, le=5)

    model_config = ConfigDict(extra="forbid")
