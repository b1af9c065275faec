from fastapi import APIRouter, Depends

from educonnect.models import User
from educonnect.schemas import UserPublic
from educonnect.utils.security import get_current_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserPublic)
async def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
