"""Newsletter subscriber export."""

import csv
import io
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from festival_cms.routers.deps import get_store, require_admin
from festival_cms.store.collection_store import CollectionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin: Subscriber"])

EXPORT_COLUMNS = ("email", "subscribed_at")


@router.get(
    "/admin/newsletter_subscribers/export.csv",
    dependencies=[Depends(require_admin)],
    summary="Export Subscribers as CSV",
)
async def export_subscribers(store: CollectionStore = Depends(get_store)):
    rows = await store.select(
        "newsletter_subscribers", order_by="subscribed_at", descending=True
    )
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    for row in rows:
        writer.writerow([row.get(column) or "" for column in EXPORT_COLUMNS])
    logger.info("Exported %d newsletter subscribers", len(rows))

    filename = f"newsletter-subscribers-{datetime.now(timezone.utc):%Y-%m-%d}.csv"
    return StreamingResponse(
        iter([buffer.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
