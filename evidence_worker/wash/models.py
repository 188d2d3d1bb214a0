from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Detection:
    """Single PII match inside one page's extracted text."""

    type: str  # e.g. "ssn", "email", "credit_card"
    label: str  # human-readable category, e.g. "Email Address"
    value: str  # matched substring
    page: int  # 1-based page number
    index: int  # offset into the unmodified text the extractor returned for the page

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "label": self.label,
            "value": self.value,
            "page": self.page,
            "index": self.index,
        }


@dataclass
class WashResult:
    """Output of a wash scan: every detection plus a per-type histogram."""

    detections: list[Detection] = field(default_factory=list)
    counts_by_type: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.detections)

    def summary(self) -> dict[str, Any]:
        return {"totalDetections": self.total, "byType": dict(self.counts_by_type)}
