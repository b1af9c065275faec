from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

# ======================
# TOKEN SCHEMAS
# ======================

class Token(BaseModel):
    access_token: str
    token_type: str
    role: str

class TokenData(BaseModel):
    email: Optional[str] = None
    role: Optional[str] = None


# ======================
# USER AUTHENTICATION SCHEMAS
# ======================

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    # Bcrypt limit is 72 bytes
    password: str = Field(..., min_length=6, max_length=72)
    confirm_password: str
    # Admin accounts are provisioned from settings, never self-registered
    role: Literal["Student", "Tutor"] = "Student"

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self
