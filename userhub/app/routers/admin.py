from fastapi import APIRouter, Depends

from userhub.models.user import Identity
from userhub.app.auth import require_admin
from userhub.app.models import MessageResponse

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/add", response_model=MessageResponse)
def add_admin(_identity: Identity = Depends(require_admin)) -> MessageResponse:
    """Add an admin. Requires the 'admin' role.

    Granting the role is not implemented yet; this only reports success.
    """
    return MessageResponse(message="Admin added successfully")
