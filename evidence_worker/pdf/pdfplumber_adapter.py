import io
from collections.abc import Iterator

import pdfplumber

from evidence_worker.pdf.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    method_name = "pdfplumber-text-layer"

    def _iter_page_text(self, pdf_bytes: bytes) -> Iterator[str | None]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                yield page.extract_text()
