from evidence_worker.database.models import JobRecord
from evidence_worker.database.repositories.documents_repository import DocumentsRepository
from evidence_worker.database.repositories.reports_repository import ReportsRepository
from evidence_worker.handlers.base import BaseJobHandler
from evidence_worker.handlers.exceptions import InvalidJobParamsError
from evidence_worker.jobs.models import JobParams, WashParams
from evidence_worker.logging.logger import Log
from evidence_worker.pdf.base import BasePdfExtractor
from evidence_worker.storage.file_loader import FileLoader
from evidence_worker.wash.scanner import WashScanner
from evidence_worker.worker.progress import ProgressReporter


class WashHandler(BaseJobHandler):
    """Scans the text layer for PII and files a report. The document is untouched."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        reports_repo: ReportsRepository,
        file_loader: FileLoader,
        pdf_extractor: BasePdfExtractor,
        scanner: WashScanner,
    ) -> None:
        self._doc_repo = doc_repo
        self._reports_repo = reports_repo
        self._file_loader = file_loader
        self._pdf_extractor = pdf_extractor
        self._scanner = scanner

    def handle(
        self,
        job: JobRecord,
        params: JobParams,
        progress: ProgressReporter,
    ) -> str | None:
        if not isinstance(params, WashParams):
            raise InvalidJobParamsError("Wash job requires WashParams")

        document = self._doc_repo.find_by_id(job.document_id)
        source = self._file_loader.load(document)
        pages = self._pdf_extractor.extract_pages(source)
        progress.report(10)

        result = self._scanner.scan(pages)
        progress.report(50)

        report_id = self._reports_repo.create_wash_report(
            document,
            policy=params.policy,
            detections=[d.to_dict() for d in result.detections],
            summary=result.summary(),
            created_by=job.created_by,
        )
        progress.report(90)

        Log.info(
            f"Wash report {report_id} for document {document.id} "
            f"(policy {params.policy}): {result.total} detections {result.counts_by_type}",
            job_id=job.id,
        )
        return None
