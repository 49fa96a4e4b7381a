"""
Thin Notion REST client for the three calls the upload protocol needs.

Responses are returned as-is; callers decide which status codes are fatal.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

import httpx

from app.config import settings
from app.receipts.schemas import UploadableFile

logger = logging.getLogger(__name__)


class NotionClient:
    def __init__(
        self,
        token: str,
        base_url: str = "https://api.notion.com/v1",
        version: str = "2022-06-28",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._http = httpx.Client(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": version,
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "NotionClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ── file uploads ─────────────────────────────────────────────────────
    def create_file_upload(self, filename: str) -> httpx.Response:
        return self._http.post("/file_uploads", json={"filename": filename})

    def send_file_upload(self, upload_id: str, file: UploadableFile) -> httpx.Response:
        # No explicit Content-Type: httpx sets the multipart boundary
        return self._http.post(
            f"/file_uploads/{upload_id}/send",
            files={"file": (file.name or "receipt", file.data, file.mime_type)},
        )

    # ── pages ────────────────────────────────────────────────────────────
    def create_page(self, database_id: str, properties: dict) -> httpx.Response:
        return self._http.post(
            "/pages",
            json={"parent": {"database_id": database_id}, "properties": properties},
        )


def get_notion_client() -> Iterator[NotionClient]:
    """Request-scoped client dependency."""
    client = NotionClient(
        token=settings.NOTION_TOKEN,
        base_url=settings.NOTION_API_URL,
        version=settings.NOTION_VERSION,
        timeout=settings.NOTION_TIMEOUT,
    )
    try:
        yield client
    finally:
        client.close()
