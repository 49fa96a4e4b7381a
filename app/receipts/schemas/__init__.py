from app.receipts.schemas.base import (  # noqa: F401
    ExtractionResult,
    ExtractRequest,
    FileHandle,
    IngestResponse,
    ReceiptRecord,
    SubmissionResult,
    UploadableFile,
    UploadStage,
)
