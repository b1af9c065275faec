import logging
from typing import Optional

from educonnect.config import Settings, settings as default_settings
from educonnect.errors import NotFoundError, ValidationError
from educonnect.models import User, UserRole
from educonnect.services.notification_service import MutationKind, fan_out
from educonnect.storage import MemStorage
from educonnect.utils.security import get_password_hash

logger = logging.getLogger(__name__)


def register_user(
    storage: MemStorage,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.STUDENT,
) -> User:
    """New tutors start unapproved; students and admins are approved at once."""
    return storage.create_user(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
    )


def set_tutor_approval(storage: MemStorage, *, user_id: int, is_approved: bool) -> User:
    user = storage.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    if user.role != UserRole.TUTOR:
        raise ValidationError("Only tutors can be approved/rejected")

    updated = storage.update_user_approval(user_id, is_approved)
    fan_out(
        storage,
        MutationKind.TUTOR_APPROVED if is_approved else MutationKind.TUTOR_REJECTED,
        related_id=user_id,
        recipients={"subject": user_id},
    )
    return updated


def bootstrap_admin(storage: MemStorage, config: Optional[Settings] = None) -> Optional[User]:
    """
    Create the first admin from ADMIN_EMAIL / ADMIN_PASSWORD when both are set.

    Does nothing when the settings are missing or the email is already taken.
    """
    config = config or default_settings
    if not config.ADMIN_EMAIL or not config.ADMIN_PASSWORD:
        return None
    if storage.get_user_by_email(config.ADMIN_EMAIL):
        return None

    admin = register_user(
        storage,
        name=config.ADMIN_NAME,
        email=config.ADMIN_EMAIL,
        password=config.ADMIN_PASSWORD,
        role=UserRole.ADMIN,
    )
    logger.info("Admin created: %s (id=%s)", admin.email, admin.id)
    if admin.id != config.ADMIN_USER_ID:
        logger.warning(
            "Admin id %s differs from ADMIN_USER_ID=%s; course notices will not reach this admin",
            admin.id,
            config.ADMIN_USER_ID,
        )
    return admin
