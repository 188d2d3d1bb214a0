from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class JobRecord:
    """Represents a row from the document_jobs table."""

    id: str
    document_id: str
    job_type: str
    status: str
    job_params: dict[str, Any] = field(default_factory=dict)
    progress_percent: int = 0
    created_by: str = ""
    error_message: str | None = None
    result_version_id: str | None = None
    created_at: datetime | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None


@dataclass(frozen=True)
class PdfDocument:
    """Represents a row from the pdf_documents table (subset of columns)."""

    id: str
    storage_key: str
    matter_id: str | None = None
    workspace_id: str | None = None


@dataclass(frozen=True)
class BatesSet:
    """Represents a row from the bates_sets table."""

    id: str
    prefix: str
    padding: int = 6
    placement: str = "bottom-right"
    font_size: int = 10
    next_number: int = 1


@dataclass(frozen=True)
class BatesRange:
    """Represents a row from the bates_ranges table."""

    id: str
    bates_set_id: str
    document_id: str
    version_id: str | None
    start_number: int
    end_number: int


@dataclass(frozen=True)
class NewVersion:
    """Values for a document_versions row that has not been inserted yet."""

    document_id: str
    version_number: int
    operation_type: str
    operation_params: dict[str, Any]
    storage_key: str
    sha256_hash: str
    created_by: str


@dataclass(frozen=True)
class DocumentVersion:
    """Represents a row from the document_versions table."""

    id: str
    document_id: str
    version_number: int
    operation_type: str
    operation_params: dict[str, Any]
    storage_key: str
    sha256_hash: str
    created_by: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class OcrText:
    """Represents a row from the document_ocr_text table."""

    id: str
    document_id: str
    full_text: str
    confidence_summary: dict[str, Any] = field(default_factory=dict)
