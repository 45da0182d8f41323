from typing import Optional

from pydantic import BaseModel

from userhub.models.user import UserProfile


class UpdateProfileRequest(BaseModel):
    """Request model for PUT /profile. Omitted fields are left unchanged."""

    username: Optional[str] = None
    email: Optional[str] = None


class UpdateProfileResponse(BaseModel):
    message: str
    user: UserProfile


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    """A bearer token issued for the signed-in session."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
