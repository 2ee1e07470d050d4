from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from domain.enums import UserRole
from domain.schemas.limits import MAX_DB_ID


class UserResponse(BaseModel):
    """Public view of a user account (never includes the password hash)"""

    id: int
    name: str
    email: str
    phone_number: Optional[str] = None
    address: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: UserRole
    vendor_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    """Compact user reference embedded in orders"""

    id: int
    name: str
    email: str
    phone_number: Optional[str] = None

    model_config = {"from_attributes": True}


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    phone_number: Optional[str] = Field(None, max_length=50)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    email: EmailStr


class ChangePasswordWithTokenRequest(BaseModel):
    """Complete a password reset using the emailed token"""

    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class MessageResponse(BaseModel):
    message: str


class UserUpdate(BaseModel):
    """Fields a user may change on their own profile"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserRoleUpdate(BaseModel):
    role: UserRole
    vendor_id: Optional[int] = Field(
        None,
        ge=1,
        le=MAX_DB_ID,
        description="Vendor operated by the user (VENDOR role only)",
    )


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)
