"""
Shared pytest fixtures — fake Notion API (httpx.MockTransport) + FastAPI TestClient.
"""
import io
import json

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image
from pillow_heif import register_heif_opener

from app.config import settings
from app.main import app
from app.receipts.notion import NotionClient, get_notion_client

register_heif_opener()


class FakeNotion:
    """In-memory stand-in for the three Notion endpoints."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.create_status = 200
        self.send_status = 200
        self.page_status = 200
        self.page_error_body = '{"object":"error","code":"validation_error"}'
        self.create_body: dict = {"object": "file_upload", "id": "fu_123"}
        self.pages_created = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/file_uploads"):
            if self.create_status != 200:
                return httpx.Response(self.create_status, json={"object": "error"})
            return httpx.Response(200, json=self.create_body)

        if path.endswith("/send"):
            if self.send_status != 200:
                return httpx.Response(self.send_status, text="upload failed")
            return httpx.Response(200, json={"object": "file_upload", "status": "uploaded"})

        if path.endswith("/pages"):
            if self.page_status != 200:
                return httpx.Response(self.page_status, text=self.page_error_body)
            self.pages_created += 1
            return httpx.Response(200, json={"object": "page", "id": f"page_{self.pages_created}"})

        return httpx.Response(404, text="not found")

    # ── helpers ──────────────────────────────────────────────────────────
    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def page_payloads(self) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path.endswith("/pages")
        ]

    def last_properties(self) -> dict:
        return self.page_payloads()[-1]["properties"]


def make_image_bytes(fmt: str = "PNG", size: tuple[int, int] = (32, 24)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 40, 40)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture()
def fake_notion():
    return FakeNotion()


@pytest.fixture()
def notion(fake_notion):
    client = NotionClient(
        token="secret-token",
        transport=httpx.MockTransport(fake_notion.handler),
    )
    try:
        yield client
    finally:
        client.close()


@pytest.fixture()
def png_bytes():
    return make_image_bytes("PNG")


@pytest.fixture()
def heic_bytes():
    return make_image_bytes("HEIF")


@pytest.fixture()
def client(notion, monkeypatch):
    monkeypatch.setattr(settings, "NOTION_DATABASE_ID", "db_123")
    monkeypatch.setattr(settings, "INGEST_API_KEY", "")

    def _override():
        yield notion

    app.dependency_overrides[get_notion_client] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
