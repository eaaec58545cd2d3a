"""Bulk partner logo upload.

Each uploaded logo becomes an active partner named after its file, appended
after the existing partners. Files are handled one by one; a rejected file
is reported and does not stop the rest of the batch.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, Form, UploadFile

from festival_cms.repositories.collection_repo import StoreError
from festival_cms.routers.deps import get_storage, get_store, require_admin
from festival_cms.store.collection_store import CollectionStore
from festival_cms.store.storage import ObjectStorage, StorageError
from festival_cms.sync.ordering import next_order_number

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin: Partner"])

LOGO_FOLDER = "partners/logos"


def partner_name_from_filename(filename: str) -> str:
    """``acme_corp-logo.png`` -> ``acme corp logo``"""
    stem = Path(filename).stem or filename
    return stem.replace("_", " ").replace("-", " ").strip() or filename


@router.post(
    "/admin/partners/bulk",
    summary="Create Partners From Logo Files",
    dependencies=[Depends(require_admin)],
)
async def bulk_upload_partners(
    files: List[UploadFile] = File(..., description="Partner logos"),
    category: str = Form("sponsor"),
    store: CollectionStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_storage),
) -> Dict[str, Any]:
    order_number = next_order_number(await store.select("partners"))
    created: List[Dict[str, Any]] = []
    failed: List[Dict[str, str]] = []

    for upload in files:
        filename = upload.filename or ""
        content = await upload.read()
        try:
            stored = await storage.upload_file(LOGO_FOLDER, filename, content)
            record = await store.insert("partners", {
                "name": partner_name_from_filename(filename),
                "logo_url": stored.public_url,
                "website_url": None,
                "category": category,
                "active": True,
                "order_number": order_number,
            })
        except (StorageError, StoreError) as exc:
            logger.warning("Bulk partner upload skipped %s: %s", filename, exc)
            failed.append({"filename": filename, "error": str(exc)})
            continue
        order_number += 1
        created.append(record)

    logger.info(
        "Bulk partner upload: %d created, %d failed", len(created), len(failed)
    )
    return {"created": created, "failed": failed}
