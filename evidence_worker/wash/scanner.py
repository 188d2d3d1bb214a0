from collections import Counter
from collections.abc import Sequence

from evidence_worker.logging.logger import Log
from evidence_worker.wash.detectors import DETECTORS, PiiDetector
from evidence_worker.wash.models import Detection, WashResult


class WashScanner:
    """Runs every PII detector over every page and aggregates the matches."""

    def __init__(self, detectors: Sequence[PiiDetector] = DETECTORS) -> None:
        self._detectors = tuple(detectors)

    def scan(self, pages: Sequence[str]) -> WashResult:
        """Scan page texts (index 0 is page 1). Empty pages contribute nothing."""
        detections: list[Detection] = []
        for page_number, text in enumerate(pages, start=1):
            if not text:
                continue
            detections.extend(self.scan_page(text, page_number))

        counts = Counter(d.type for d in detections)
        Log.debug(f"Wash scan: {len(detections)} detections across {len(pages)} pages")
        return WashResult(detections=detections, counts_by_type=dict(counts))

    def scan_page(self, text: str, page_number: int) -> list[Detection]:
        return [
            Detection(
                type=detector.type,
                label=detector.label,
                value=match.group(0),
                page=page_number,
                index=match.start(),
            )
            for detector in self._detectors
            for match in detector.pattern.finditer(text)
        ]
