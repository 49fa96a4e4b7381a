"""
Record builder — form fields → Notion page property map.
"""
from __future__ import annotations

import math
from datetime import date as date_type

from app.receipts.pipeline.amount import parse_amount
from app.receipts.schemas import FileHandle, ReceiptRecord, UploadableFile

TITLE_TEMPLATE = "Receipt — {date}"

# Column names in the target database
PROP_TITLE = "Name"
PROP_DATE = "Date"
PROP_AMOUNT = "Amount"
PROP_MERCHANT = "Merchant"
PROP_NOTES = "Notes"
PROP_FILE = "Receipt"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _rich_text(content: str) -> list[dict]:
    return [{"text": {"content": content}}]


def build_record(
    date: str | None = None,
    amount: str | None = None,
    merchant: str | None = None,
    notes: str | None = None,
) -> ReceiptRecord:
    """Apply form defaults: today's date, empty optional fields."""
    date = (date or "").strip() or date_type.today().isoformat()
    return ReceiptRecord(
        title=TITLE_TEMPLATE.format(date=date),
        date=date,
        amount=(amount or "").strip(),
        merchant=(merchant or "").strip(),
        notes=(notes or "").strip(),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_properties(
    record: ReceiptRecord,
    handle: FileHandle | None = None,
    file: UploadableFile | None = None,
) -> dict:
    """Return the page ``properties`` payload.

    *handle* must only be passed once its bytes were sent successfully.
    """
    properties: dict = {
        PROP_TITLE: {"title": _rich_text(record.title)},
        PROP_DATE: {"date": {"start": record.date}},
    }

    amount = parse_amount(record.amount)
    number = float(amount) if amount is not None else None
    if number is not None and math.isfinite(number):
        properties[PROP_AMOUNT] = {"number": number}
    if record.merchant.strip():
        properties[PROP_MERCHANT] = {"rich_text": _rich_text(record.merchant.strip())}
    if record.notes.strip():
        properties[PROP_NOTES] = {"rich_text": _rich_text(record.notes.strip())}

    if handle is not None:
        name = (file.name if file else "") or "receipt.jpg"
        properties[PROP_FILE] = {
            "files": [
                {
                    "type": "file_upload",
                    "file_upload": {"id": handle.id},
                    "name": name,
                }
            ]
        }
    return properties
