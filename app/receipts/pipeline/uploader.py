"""
Upload orchestrator.

Drives the external store's protocol for one receipt:

    not_started → handle_created → bytes_sent → record_created

Creating the handle and sending the bytes may fail without failing the
request; the record is then created without a file. Only record creation
can end in ``rejected``.
"""
from __future__ import annotations

import logging

import httpx

from app.receipts.notion import NotionClient
from app.receipts.pipeline.record_builder import build_properties
from app.receipts.schemas import (
    FileHandle,
    ReceiptRecord,
    SubmissionResult,
    UploadableFile,
    UploadStage,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

def create_upload_handle(client: NotionClient, file: UploadableFile) -> FileHandle | None:
    """Step 1. ``None`` means uploads are unavailable for this request."""
    filename = file.name or "receipt"
    try:
        resp = client.create_file_upload(filename)
    except httpx.HTTPError as e:
        logger.warning("Upload unavailable: create handle failed: %s", e)
        return None
    if not resp.is_success:
        logger.warning(
            "Upload unavailable: create handle returned %d: %s",
            resp.status_code, resp.text[:200],
        )
        return None
    try:
        upload_id = resp.json().get("id")
    except ValueError:
        upload_id = None
    if not upload_id:
        logger.warning("Upload unavailable: create handle response has no id")
        return None
    return FileHandle(id=str(upload_id))


def send_bytes(client: NotionClient, handle: FileHandle, file: UploadableFile) -> bool:
    """Step 2. ``False`` abandons *handle*."""
    try:
        resp = client.send_file_upload(handle.id, file)
    except httpx.HTTPError as e:
        logger.warning("Upload %s abandoned: send failed: %s", handle.id, e)
        return False
    if not resp.is_success:
        logger.warning(
            "Upload %s abandoned: send returned %d: %s",
            handle.id, resp.status_code, resp.text[:200],
        )
        return False
    return True


def create_record(
    client: NotionClient,
    database_id: str,
    record: ReceiptRecord,
    handle: FileHandle | None = None,
    file: UploadableFile | None = None,
) -> SubmissionResult:
    """Step 3. Always attempted; the only step whose failure is fatal."""
    properties = build_properties(record, handle=handle, file=file)
    resp = client.create_page(database_id, properties)
    if not resp.is_success:
        logger.error("Record creation rejected (%d): %s", resp.status_code, resp.text[:500])
        return SubmissionResult(
            stage=UploadStage.REJECTED,
            file_attached=False,
            status_code=resp.status_code,
            error_body=resp.text,
        )

    try:
        page_id = resp.json().get("id")
    except ValueError:
        page_id = None
    return SubmissionResult(
        stage=UploadStage.RECORD_CREATED,
        file_attached=handle is not None,
        page_id=page_id,
        status_code=resp.status_code,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def submit_receipt(
    client: NotionClient,
    database_id: str,
    file: UploadableFile,
    record: ReceiptRecord,
) -> SubmissionResult:
    """Upload *file* (best effort) and create the record. One attempt per step."""
    stage = UploadStage.NOT_STARTED
    attached: FileHandle | None = None

    handle = create_upload_handle(client, file)
    if handle is not None:
        stage = UploadStage.HANDLE_CREATED
        logger.info("Upload handle created: %s", handle.id)
        if send_bytes(client, handle, file):
            stage = UploadStage.BYTES_SENT
            attached = handle
            logger.info("Sent %d bytes for upload %s", file.size, handle.id)

    logger.info("Creating record from stage=%s", stage.value)
    result = create_record(client, database_id, record, handle=attached, file=file)
    if result.ok:
        logger.info(
            "Record created: %s (file_attached=%s)", result.page_id, result.file_attached
        )
    return result
