"""
Media upload and retrieval endpoints.

Admins upload images (logos, gallery pictures, slider banners) and PDF
documents; the response carries the public URL to store on the record that
uses the file. Files are served back from the same storage.
"""

import logging
from typing import Any, Dict

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
)
from fastapi.responses import FileResponse

from festival_cms.routers.deps import get_storage, require_admin
from festival_cms.store.storage import (
    InvalidUploadError,
    ObjectStorage,
    StorageError,
    get_media_category,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Media"])


@router.post(
    "/admin/media/upload",
    summary="Upload Media File",
    dependencies=[Depends(require_admin)],
)
async def upload_media(
    request: Request,
    file: UploadFile = File(..., description="Image or PDF to upload"),
    folder: str = Form("global", description="Folder such as partners or gallery"),
    storage: ObjectStorage = Depends(get_storage),
) -> Dict[str, Any]:
    """Upload an asset with size, type and content validation.

    Supported formats:
        * Images: JPG, PNG, GIF, WebP, SVG
        * Documents: PDF
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename is required")

    # Pre-flight size check using Content-Length header if available
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > storage.max_size + 64 * 1024:
        raise HTTPException(
            status_code=400,
            detail=(
                f"File size ({cl} bytes) exceeds maximum allowed size "
                f"({storage.max_size} bytes)"
            ),
        )

    content = await file.read()
    try:
        stored = await storage.upload_file(folder, file.filename, content)
    except InvalidUploadError as exc:
        logger.info("Rejected upload %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    logger.info("Uploaded %s as %s", file.filename, stored.path)
    return {
        "success": True,
        "media": {
            **stored.to_dict(),
            "originalName": file.filename,
            "category": get_media_category(file.filename),
        },
    }


@router.get("/media/{path:path}", summary="Serve Media File")
async def serve_media(
    path: str, storage: ObjectStorage = Depends(get_storage)
):
    try:
        target = storage.open(path)
    except StorageError:
        raise HTTPException(status_code=404, detail="Media file not found")
    return FileResponse(target)
