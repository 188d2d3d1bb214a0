from dataclasses import dataclass
from enum import Enum


class JobType(str, Enum):
    BATES = "bates"
    STAMP = "stamp"
    WASH = "wash"
    OCR = "ocr"


class JobStatus(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class BatesParams:
    """Params for a Bates numbering job."""

    bates_set_id: str


@dataclass(frozen=True)
class StampParams:
    """Params for a confidentiality stamp job."""

    stamp_type: str = "CONFIDENTIAL"
    placement: str = "top-right"
    font_size: float = 24


@dataclass(frozen=True)
class WashParams:
    """Params for a PII wash scan. The policy is recorded, not interpreted."""

    policy: str = "medium"


@dataclass(frozen=True)
class OcrParams:
    """Text extraction takes no params."""


JobParams = BatesParams | StampParams | WashParams | OcrParams
