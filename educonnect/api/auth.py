import logging

from fastapi import APIRouter, Depends, HTTPException, status

from educonnect.database import get_storage
from educonnect.errors import AppError
from educonnect.models import UserRole
from educonnect.schemas import LoginRequest, RegisterRequest, RegisterResponse, Token, UserPublic
from educonnect.services import user_service
from educonnect.storage import MemStorage
from educonnect.utils.security import authenticate_user, create_user_token

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


# ===== REGISTER ENDPOINT =====

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: RegisterRequest, storage: MemStorage = Depends(get_storage)):
    """Register a student or tutor; tutors wait for admin approval"""
    try:
        user = user_service.register_user(
            storage,
            name=user_data.name,
            email=user_data.email,
            password=user_data.password,
            role=UserRole(user_data.role),
        )
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Registration failed for %s", user_data.email)
        raise HTTPException(status_code=500, detail="Internal server error")

    message = "Registration successful"
    if user.role == UserRole.TUTOR:
        message += ". Your tutor account is pending admin approval."
    return {"message": message, "user": UserPublic.model_validate(user)}


# ===== LOGIN ENDPOINT =====

@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest, storage: MemStorage = Depends(get_storage)):
    """Verify credentials and return access token"""
    user = authenticate_user(storage, credentials.email, credentials.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return {
        "access_token": create_user_token(user),
        "token_type": "bearer",
        "role": user.role.value,
    }
