from abc import ABC, abstractmethod
from collections.abc import Iterator

from evidence_worker.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Reads the embedded text layer of a PDF, one string per page.

    Subclasses yield raw page text. Text is returned as the engine produced
    it, so character offsets into a page stay valid against its text layer.
    """

    method_name: str = ""

    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return page texts in page order. Pages without a text layer yield "".

        Raises:
            PdfExtractionError: if the bytes cannot be parsed as a PDF.
        """
        try:
            return [text or "" for text in self._iter_page_text(pdf_bytes)]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(
                f"{self.method_name} extraction failed: {exc}"
            ) from exc

    @abstractmethod
    def _iter_page_text(self, pdf_bytes: bytes) -> Iterator[str | None]:
        """Yield the raw text of each page."""
