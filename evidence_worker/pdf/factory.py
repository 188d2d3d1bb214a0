from evidence_worker.config.settings import Settings
from evidence_worker.logging.logger import Log
from evidence_worker.pdf.base import BasePdfExtractor
from evidence_worker.pdf.pdfplumber_adapter import PdfPlumberAdapter
from evidence_worker.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Picks the text-layer extractor shared by the wash and ocr handlers."""

    ENGINES: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.strip().lower()
        try:
            extractor = cls.ENGINES[engine]()
        except KeyError:
            raise ValueError(
                f"Unknown PDF engine '{engine}' in PDF_ENGINE. "
                f"Choose from: {sorted(cls.ENGINES)}"
            ) from None
        Log.debug(f"Text extraction engine: {engine} ({extractor.method_name})")
        return extractor
