"""
Error taxonomy for the ingestion endpoint.

Every ``IngestError`` carries the HTTP status it is rendered with; the
handlers in ``app.main`` turn them into plain-text responses.
"""
from __future__ import annotations


class IngestError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(IngestError):
    status_code = 400


class Unauthorized(IngestError):
    status_code = 401


class PayloadTooLarge(IngestError):
    status_code = 413


class UpstreamRejected(IngestError):
    """Record creation failed; status and body are the store's own."""

    def __init__(self, status_code: int, body: str):
        super().__init__(body, status_code=status_code)
        self.body = body


class InternalFailure(IngestError):
    status_code = 500
