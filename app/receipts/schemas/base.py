"""
Pydantic v2 models shared by the ingestion pipeline and its endpoints.
"""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

class ExtractionResult(BaseModel):
    """Best-guess fields read from recognized receipt text."""
    amount: Optional[Decimal] = Field(
        None, gt=0, lt=100000, description="Largest monetary figure found"
    )
    merchant: Optional[str] = Field(None, max_length=50)


# ---------------------------------------------------------------------------
# Upload pipeline
# ---------------------------------------------------------------------------

class UploadableFile(BaseModel):
    data: bytes
    name: str = ""
    mime_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)


class FileHandle(BaseModel):
    """Reference to an in-progress upload in the external store."""
    id: str


class ReceiptRecord(BaseModel):
    title: str
    date: str = Field(..., description="ISO calendar date, e.g. 2024-03-01")
    amount: str = ""
    merchant: str = ""
    notes: str = ""


class UploadStage(str, Enum):
    NOT_STARTED = "not_started"
    HANDLE_CREATED = "handle_created"
    BYTES_SENT = "bytes_sent"
    RECORD_CREATED = "record_created"
    REJECTED = "rejected"


class SubmissionResult(BaseModel):
    stage: UploadStage
    file_attached: bool = False
    page_id: Optional[str] = None
    status_code: Optional[int] = None
    error_body: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.stage == UploadStage.RECORD_CREATED


# ---------------------------------------------------------------------------
# API request / response envelopes
# ---------------------------------------------------------------------------

class ExtractRequest(BaseModel):
    raw_text: str = ""


class IngestResponse(BaseModel):
    ok: bool = True
    page_id: Optional[str] = None
    file_attached: bool = False
