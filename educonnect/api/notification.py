from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from educonnect.database import get_storage
from educonnect.models import User
from educonnect.schemas import NotificationResponse
from educonnect.services import notification_service
from educonnect.storage import MemStorage
from educonnect.utils.security import get_current_user

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/my", response_model=List[NotificationResponse])
async def get_my_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    storage: MemStorage = Depends(get_storage)
):
    return notification_service.list_user_notifications(
        storage,
        user_id=current_user.id,
        unread_only=unread_only,
        limit=limit,
    )


@router.get("/unread-count")
async def get_unread_count(
    current_user: User = Depends(get_current_user),
    storage: MemStorage = Depends(get_storage)
):
    return {"unread_count": notification_service.get_unread_count(storage, user_id=current_user.id)}


@router.patch("/read-all")
async def mark_all_notifications_read(
    current_user: User = Depends(get_current_user),
    storage: MemStorage = Depends(get_storage)
):
    count = notification_service.mark_all_notifications_read(storage, user_id=current_user.id)
    return {"message": "All notifications marked as read", "updated": count}


@router.patch("/{notification_id}/read")
async def mark_notification_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    storage: MemStorage = Depends(get_storage)
):
    notification = notification_service.mark_notification_read(
        storage,
        user_id=current_user.id,
        notification_id=notification_id,
    )
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    return {"message": "Notification marked as read", "id": notification.id}
