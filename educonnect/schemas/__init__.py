# educonnect/schemas/__init__.py

# Auth schemas
from .auth import Token, TokenData, LoginRequest, RegisterRequest

# User schemas
from .user import (
    UserPublic,
    UserSummary,
    RegisterResponse,
    TutorApprovalRequest,
    PlatformStatistics,
)

# Review schemas
from .review import (
    ReviewCreateRequest,
    ReviewResponse,
    ReviewWithStudent,
    ReviewSubmitResponse,
    ReviewDeleteResponse,
    RatingRecalculationResponse,
)

# Course schemas
from .course import (
    CourseCreateRequest,
    CourseUpdateRequest,
    CourseResponse,
    CourseListItem,
    CourseDetail,
)

# Booking schemas
from .booking import (
    BookingCreateRequest,
    BookingStatusUpdate,
    BookingResponse,
    BookingDetail,
    CourseRef,
)

from .notification import NotificationResponse

# Dashboard schemas
from .dashboard import (
    StudentDashboard,
    BookingRef,
    StudentCourse,
    TutorCourse,
    TutorDashboard,
)

__all__ = [
    "Token",
    "TokenData",
    "LoginRequest",
    "RegisterRequest",
    "UserPublic",
    "UserSummary",
    "RegisterResponse",
    "TutorApprovalRequest",
    "PlatformStatistics",
    "ReviewCreateRequest",
    "ReviewResponse",
    "ReviewWithStudent",
    "ReviewSubmitResponse",
    "ReviewDeleteResponse",
    "RatingRecalculationResponse",
    "CourseCreateRequest",
    "CourseUpdateRequest",
    "CourseResponse",
    "CourseListItem",
    "CourseDetail",
    "BookingCreateRequest",
    "BookingStatusUpdate",
    "BookingResponse",
    "BookingDetail",
    "CourseRef",
    "NotificationResponse",
    "StudentDashboard",
    "BookingRef",
    "StudentCourse",
    "TutorCourse",
    "TutorDashboard",
]
