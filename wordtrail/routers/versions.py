from typing import Optional

from fastapi import APIRouter, Depends, Request

from wordtrail.models.schemas import (
    DeleteVersionResponse,
    ErrorResponse,
    SaveVersionRequest,
    SaveVersionResponse,
    VersionDetailResponse,
    VersionListResponse,
    VersionSummary,
)
from wordtrail.services.highlight import excerpt, highlight_text
from wordtrail.services.versions import VersionStore

router = APIRouter()

ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_version_store(request: Request) -> VersionStore:
    return request.app.state.version_store


@router.post("/save-version", response_model=SaveVersionResponse, responses=ERRORS)
async def save_version(
    body: Optional[SaveVersionRequest] = None,
    versions: VersionStore = Depends(get_version_store),
):
    """
    Save the submitted text as a new version, diffed against the latest one.
    Body: {"newText": "..."}
    """
    saved = await versions.save_version(body.new_text if body else None)
    return {"message": "Version saved", "data": saved}


@router.get("/versions", response_model=VersionListResponse, responses=ERRORS)
async def list_versions(
    request: Request,
    versions: VersionStore = Depends(get_version_store),
):
    """All versions, newest first, with list-preview fields attached."""
    limit = request.app.state.settings.PREVIEW_CHARS
    history = await versions.list_versions()

    data = [
        VersionSummary.model_validate({**v.model_dump(), "excerpt": excerpt(v.new_text, limit)})
        for v in history
    ]
    return {"success": True, "count": len(data), "data": data}


@router.get("/version/{version_id}", response_model=VersionDetailResponse, responses=ERRORS)
async def get_version(
    version_id: str,
    versions: VersionStore = Depends(get_version_store),
):
    """
    One version plus its highlighted text, for the client's view/restore.
    Restoring only loads newText into the draft; nothing is written here.
    """
    version = await versions.get_version(version_id)
    return {
        "success": True,
        "data": version,
        "highlight": highlight_text(version.new_text, version.added_words, version.removed_words),
    }


@router.delete("/version/{version_id}", response_model=DeleteVersionResponse, responses=ERRORS)
async def delete_version(
    version_id: str,
    versions: VersionStore = Depends(get_version_store),
):
    """Delete one version. Other versions keep their stored diffs."""
    deleted = await versions.delete_version(version_id)
    return {"message": "Version deleted successfully", "data": deleted}
