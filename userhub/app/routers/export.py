"""Data export routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from userhub.models.user import Identity
from userhub.services import ExportService
from userhub.app.auth import require_identity
from userhub.app.constants import EXPORT_FILENAME, SAMPLE_EXPORT_COLUMNS, SAMPLE_EXPORT_ROWS
from userhub.app.dependencies import get_export_service

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/csv", response_class=FileResponse)
def export_csv(
    _identity: Identity = Depends(require_identity),
    service: ExportService = Depends(get_export_service),
) -> FileResponse:
    """Download the export as a CSV attachment.

    The file is deleted once the response has been sent.
    """
    path = service.export_rows(SAMPLE_EXPORT_ROWS, SAMPLE_EXPORT_COLUMNS)
    return FileResponse(
        path,
        media_type="text/csv",
        filename=EXPORT_FILENAME,
        background=BackgroundTask(path.unlink, missing_ok=True),
    )
