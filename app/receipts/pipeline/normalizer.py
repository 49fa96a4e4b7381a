"""
Image normalizer — HEIC/HEIF → JPEG, plus the single-part size ceiling.
"""
from __future__ import annotations

import io
import logging
import re

from PIL import Image
from pillow_heif import register_heif_opener

from app.receipts.errors import PayloadTooLarge
from app.receipts.schemas import UploadableFile

register_heif_opener()

logger = logging.getLogger(__name__)

HEIC_MIME_TYPES = {"image/heic", "image/heif"}
JPEG_MIME_TYPE = "image/jpeg"
DEFAULT_JPEG_QUALITY = 90
MAX_UPLOAD_BYTES = 20 * 1024 * 1024

_HEIC_SUFFIX = re.compile(r"\.hei[cf]$", re.IGNORECASE)


def is_heic(file: UploadableFile) -> bool:
    # Capture devices do not always declare the MIME type, so the
    # filename is checked as well.
    if (file.mime_type or "").lower() in HEIC_MIME_TYPES:
        return True
    return bool(_HEIC_SUFFIX.search(file.name or ""))


def jpeg_name(name: str) -> str:
    if _HEIC_SUFFIX.search(name):
        return _HEIC_SUFFIX.sub(".jpg", name)
    return f"{name or 'receipt'}.jpg"


def transcode_to_jpeg(data: bytes, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    with Image.open(io.BytesIO(data)) as image:
        if image.mode != "RGB":
            image = image.convert("RGB")
        out = io.BytesIO()
        image.save(out, format="JPEG", quality=quality)
    return out.getvalue()


def normalize_upload(
    file: UploadableFile,
    max_bytes: int = MAX_UPLOAD_BYTES,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> UploadableFile:
    """Return *file* in an upload-ready format within the size ceiling.

    HEIC/HEIF input is re-encoded as JPEG; everything else passes through
    untouched. Raises ``PayloadTooLarge`` when the result exceeds
    *max_bytes*.
    """
    if is_heic(file):
        logger.info("Transcoding HEIC upload %r (%d bytes)", file.name, file.size)
        file = UploadableFile(
            data=transcode_to_jpeg(file.data, quality=quality),
            name=jpeg_name(file.name),
            mime_type=JPEG_MIME_TYPE,
        )
        logger.info("Transcoded to %r (%d bytes)", file.name, file.size)

    if file.size > max_bytes:
        logger.warning("Rejecting %r: %d bytes > %d", file.name, file.size, max_bytes)
        raise PayloadTooLarge("File too large for single-part upload")
    return file
