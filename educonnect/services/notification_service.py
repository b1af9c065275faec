from __future__ import annotations

import enum
import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from educonnect.config import settings
from educonnect.models import Notification, UserRole
from educonnect.storage import MemStorage

logger = logging.getLogger(__name__)


class MutationKind(str, enum.Enum):
    BOOKING_REQUESTED = "booking_requested"
    BOOKING_CONFIRMED = "booking_confirmed"
    REVIEW_CREATED = "review_created"
    COURSE_CREATED = "course_created"
    TUTOR_APPROVED = "tutor_approved"
    TUTOR_REJECTED = "tutor_rejected"


class NotificationRule(NamedTuple):
    # "tutor", "student" or "subject" are looked up in the caller's recipients;
    # "admin" resolves to settings.ADMIN_USER_ID when that user is an admin
    recipient: str
    type: str
    template: str


FANOUT_RULES: Dict[MutationKind, Tuple[NotificationRule, ...]] = {
    MutationKind.BOOKING_REQUESTED: (
        NotificationRule(
            "tutor",
            "booking",
            'New booking request from {student_name} for your course "{course_title}"',
        ),
        NotificationRule(
            "student",
            "booking",
            'Your booking request for "{course_title}" has been submitted and is pending tutor approval',
        ),
    ),
    MutationKind.BOOKING_CONFIRMED: (
        NotificationRule(
            "student",
            "confirmation",
            'Your booking for "{course_title}" has been confirmed',
        ),
    ),
    MutationKind.REVIEW_CREATED: (
        NotificationRule(
            "tutor",
            "review",
            'New review ({rating}/5) for your course "{course_title}"',
        ),
    ),
    MutationKind.COURSE_CREATED: (
        NotificationRule(
            "admin",
            "course",
            'New course "{course_title}" created by {tutor_name}',
        ),
    ),
    MutationKind.TUTOR_APPROVED: (
        NotificationRule(
            "subject",
            "approval",
            "Congratulations! Your tutor account has been approved.",
        ),
    ),
    MutationKind.TUTOR_REJECTED: (
        NotificationRule(
            "subject",
            "approval",
            "Your tutor account application has been rejected.",
        ),
    ),
}


def fan_out(
    storage: MemStorage,
    mutation: MutationKind,
    *,
    related_id: Optional[int],
    recipients: Optional[Dict[str, int]] = None,
    **context,
) -> List[Notification]:
    """Create the notifications FANOUT_RULES lists for ``mutation``."""
    recipients = recipients or {}
    created = []
    for rule in FANOUT_RULES[mutation]:
        if rule.recipient == "admin":
            admin = storage.get_user(settings.ADMIN_USER_ID)
            if admin is None or admin.role != UserRole.ADMIN:
                logger.warning(
                    "ADMIN_USER_ID=%s is not an admin account; %s notice not sent",
                    settings.ADMIN_USER_ID,
                    mutation.value,
                )
                continue
            user_id = admin.id
        else:
            user_id = recipients[rule.recipient]
        created.append(
            storage.create_notification(
                user_id=user_id,
                message=rule.template.format(**context),
                type=rule.type,
                related_id=related_id,
            )
        )
    logger.debug(
        "Fan-out %s created %d notification(s) for related_id=%s",
        mutation.value,
        len(created),
        related_id,
    )
    return created


def list_user_notifications(
    storage: MemStorage,
    *,
    user_id: int,
    unread_only: bool = False,
    limit: int = 50,
) -> List[Notification]:
    return storage.list_notifications(user_id, unread_only=unread_only)[:limit]


def mark_notification_read(
    storage: MemStorage,
    *,
    user_id: int,
    notification_id: int,
) -> Optional[Notification]:
    notification = storage.get_notification(notification_id)
    if not notification or notification.user_id != user_id:
        return None
    return storage.mark_notification_read(notification_id)


def mark_all_notifications_read(storage: MemStorage, *, user_id: int) -> int:
    return storage.mark_all_notifications_read(user_id)


def get_unread_count(storage: MemStorage, *, user_id: int) -> int:
    return len(storage.list_notifications(user_id, unread_only=True))
