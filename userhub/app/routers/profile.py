"""Profile routes for the authenticated caller."""

from fastapi import APIRouter, Depends

from userhub.models.user import Identity, UserProfile
from userhub.services import ProfileService
from userhub.app.auth import require_identity
from userhub.app.dependencies import get_profile_service
from userhub.app.models import UpdateProfileRequest, UpdateProfileResponse

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserProfile)
def read_profile(
    identity: Identity = Depends(require_identity),
    service: ProfileService = Depends(get_profile_service),
) -> UserProfile:
    """Get the caller's own user record."""
    return UserProfile.from_user(service.get_profile(identity))


@router.put("", response_model=UpdateProfileResponse)
def update_profile(
    request: UpdateProfileRequest,
    identity: Identity = Depends(require_identity),
    service: ProfileService = Depends(get_profile_service),
) -> UpdateProfileResponse:
    """Update the caller's username and/or email.

    Omitted fields keep their current value. Returns 404 if the caller has no
    user record; a record is never created here.
    """
    user = service.update_profile(
        identity, username=request.username, email=request.email
    )
    return UpdateProfileResponse(
        message="User profile updated successfully",
        user=UserProfile.from_user(user),
    )
