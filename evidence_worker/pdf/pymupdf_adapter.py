from collections.abc import Iterator

import pymupdf

from evidence_worker.pdf.base import BasePdfExtractor


class PyMuPdfAdapter(BasePdfExtractor):
    method_name = "pymupdf-text-layer"

    def _iter_page_text(self, pdf_bytes: bytes) -> Iterator[str | None]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            for page in doc:
                yield page.get_text()
