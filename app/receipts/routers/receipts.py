"""
Receipt ingestion API endpoints.

POST /api/notion-receipt  — photo + form fields → record in Notion
POST /api/extract         — recognized text → amount / merchant guess
"""
from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Header, UploadFile

from app.config import settings
from app.receipts.errors import (
    BadRequest,
    IngestError,
    InternalFailure,
    Unauthorized,
    UpstreamRejected,
)
from app.receipts.notion import NotionClient, get_notion_client
from app.receipts.pipeline import process_text
from app.receipts.pipeline.normalizer import normalize_upload
from app.receipts.pipeline.record_builder import build_record
from app.receipts.pipeline.uploader import submit_receipt
from app.receipts.schemas import (
    ExtractionResult,
    ExtractRequest,
    IngestResponse,
    UploadableFile,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def verify_api_key(x_api_key: Optional[str] = Header(None)) -> None:
    """Shared-secret check; a no-op when no secret is configured."""
    expected = settings.INGEST_API_KEY
    if not expected:
        return
    if not x_api_key or not secrets.compare_digest(x_api_key, expected):
        logger.warning("Rejected ingest request: bad or missing x-api-key")
        raise Unauthorized("Unauthorized")


# ── POST /api/notion-receipt ─────────────────────────────────────────────
@router.post("/notion-receipt", response_model=IngestResponse)
def ingest_receipt(
    file: Optional[UploadFile] = File(None),
    amount: str = Form(""),
    merchant: str = Form(""),
    date: str = Form(""),
    notes: str = Form(""),
    text: str = Form(""),
    _: None = Depends(verify_api_key),
    client: NotionClient = Depends(get_notion_client),
):
    if file is None:
        raise BadRequest("Missing file")

    try:
        amount, merchant = _fill_from_text(text, amount, merchant)

        upload = UploadableFile(
            data=file.file.read(),
            name=file.filename or "",
            mime_type=file.content_type or "application/octet-stream",
        )
        logger.info("Ingest: name=%r type=%s size=%d", upload.name, upload.mime_type, upload.size)

        upload = normalize_upload(
            upload,
            max_bytes=settings.MAX_UPLOAD_BYTES,
            quality=settings.JPEG_QUALITY,
        )
        record = build_record(date=date, amount=amount, merchant=merchant, notes=notes)

        result = submit_receipt(client, settings.NOTION_DATABASE_ID, upload, record)
    except IngestError:
        raise
    except Exception as e:
        logger.error("Ingest failed: %s", e, exc_info=True)
        raise InternalFailure(str(e) or "Server error")

    if not result.ok:
        raise UpstreamRejected(result.status_code or 502, result.error_body or "")

    return IngestResponse(ok=True, page_id=result.page_id, file_attached=result.file_attached)


def _fill_from_text(text: str, amount: str, merchant: str) -> tuple[str, str]:
    """Fill empty amount/merchant from recognized text; caller values win."""
    amount, merchant = amount.strip(), merchant.strip()
    if not text.strip() or (amount and merchant):
        return amount, merchant

    guess = process_text(text)
    if not amount and guess.amount is not None:
        amount = str(guess.amount)
    if not merchant and guess.merchant:
        merchant = guess.merchant
    return amount, merchant


# ── POST /api/extract ────────────────────────────────────────────────────
@router.post("/extract", response_model=ExtractionResult)
def extract(req: ExtractRequest):
    logger.info("Extract: len=%d", len(req.raw_text))
    return process_text(req.raw_text)
