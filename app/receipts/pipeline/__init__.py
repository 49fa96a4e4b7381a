"""
Receipt text extraction pipeline.

Runs the amount extractor and merchant guesser over OCR output.
"""
import logging

from app.receipts.schemas import ExtractionResult
from app.receipts.pipeline.amount import extract_amount
from app.receipts.pipeline.merchant import guess_merchant

logger = logging.getLogger(__name__)


def process_text(raw_text: str) -> ExtractionResult:
    """Extract amount and merchant from recognized text. Never raises on content."""
    amount = extract_amount(raw_text)
    logger.info("Amount candidate: %s", amount)

    merchant = guess_merchant(raw_text)
    logger.info("Merchant guess: %r", merchant)

    return ExtractionResult(amount=amount, merchant=merchant or None)
