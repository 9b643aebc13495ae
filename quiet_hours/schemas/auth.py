"""Auth and profile schemas."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import EmailStr, Field, StringConstraints

from quiet_hours.schemas.base import BaseSchema, IDMixin

# Taken exactly as typed; the model-wide whitespace stripping does not apply
Password = Annotated[str, StringConstraints(strip_whitespace=False, min_length=1)]


class SignupRequest(BaseSchema):
    """Create an account."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)
    password: Password
    confirm_password: Optional[Password] = None


class LoginRequest(BaseSchema):
    """Exchange credentials for a token."""

    email: EmailStr
    password: Password


class ProfileUpdate(BaseSchema):
    """Update profile. Omitted fields keep their current value."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    bio: Optional[str] = Field(None, max_length=500)
    profile_image: Optional[str] = None


class UserResponse(BaseSchema, IDMixin):
    """Public view of a user."""

    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthResponse(BaseSchema):
    """Signup/login result."""

    message: str
    user: UserResponse
    token: str


class ProfileResponse(BaseSchema):
    """Profile read/update result."""

    message: str
    user: UserResponse
