from evidence_worker.database.models import JobRecord
from evidence_worker.database.repositories.documents_repository import DocumentsRepository
from evidence_worker.database.repositories.reports_repository import ReportsRepository
from evidence_worker.handlers.base import BaseJobHandler
from evidence_worker.jobs.models import JobParams
from evidence_worker.logging.logger import Log
from evidence_worker.pdf.base import BasePdfExtractor
from evidence_worker.storage.file_loader import FileLoader
from evidence_worker.worker.progress import ProgressReporter

NO_TEXT_PLACEHOLDER = (
    "[No extractable text found - document may contain scanned images. "
    "Optical character recognition is not performed on image-only pages.]"
)


def join_pages(pages: list[str]) -> str:
    """Concatenate stripped page texts under ``--- Page N ---`` markers.

    Returns the placeholder when no page has any text.
    """
    if not any(page.strip() for page in pages):
        return NO_TEXT_PLACEHOLDER
    return "".join(
        f"--- Page {number} ---\n{text.strip()}\n\n"
        for number, text in enumerate(pages, start=1)
    )


class OcrHandler(BaseJobHandler):
    """Caches the embedded text layer of a document, replacing any earlier run."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        reports_repo: ReportsRepository,
        file_loader: FileLoader,
        pdf_extractor: BasePdfExtractor,
    ) -> None:
        self._doc_repo = doc_repo
        self._reports_repo = reports_repo
        self._file_loader = file_loader
        self._pdf_extractor = pdf_extractor

    def handle(
        self,
        job: JobRecord,
        params: JobParams,
        progress: ProgressReporter,
    ) -> str | None:
        document = self._doc_repo.find_by_id(job.document_id)
        source = self._file_loader.load(document)
        pages = self._pdf_extractor.extract_pages(source)
        progress.report(10)

        full_text = join_pages(pages)
        progress.report(50)

        self._reports_repo.upsert_ocr_text(
            document.id,
            full_text=full_text,
            confidence_summary={
                "method": self._pdf_extractor.method_name,
                "pageCount": len(pages),
            },
        )
        progress.report(90)

        Log.info(
            f"Extracted {len(full_text)} chars from {len(pages)} pages "
            f"of document {document.id}",
            job_id=job.id,
        )
        return None
