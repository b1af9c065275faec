# educonnect/errors.py
"""
Typed failures raised by the storage and service layers.

Each error carries the HTTP status the API layer answers with, so routers can
translate any of them with a single ``except AppError`` clause.
"""


class AppError(Exception):
    """Base class for expected, per-request failures."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid data"


class DuplicateBookingError(AppError):
    status_code = 400
    default_message = "You have already booked this course"


class DuplicateReviewError(AppError):
    status_code = 400
    default_message = "You have already reviewed this course"


class NotEnrolledError(AppError):
    status_code = 403
    default_message = "You must book this course before reviewing it"


class BookingNotConfirmedError(AppError):
    status_code = 403
    default_message = "You can only review confirmed bookings"


class PermissionDeniedError(AppError):
    """Ownership or role mismatch detected by a service."""

    status_code = 403
    default_message = "You do not have permission to perform this action"
