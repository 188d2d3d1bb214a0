from collections.abc import Mapping
from pathlib import Path

from evidence_worker.config.settings import Settings
from evidence_worker.database.models import JobRecord
from evidence_worker.database.repositories.bates_repository import BatesRepository
from evidence_worker.database.repositories.documents_repository import DocumentsRepository
from evidence_worker.database.repositories.reports_repository import ReportsRepository
from evidence_worker.database.repositories.versions_repository import VersionsRepository
from evidence_worker.handlers.base import BaseJobHandler
from evidence_worker.handlers.bates_handler import BatesHandler
from evidence_worker.handlers.exceptions import UnsupportedJobTypeError
from evidence_worker.handlers.ocr_handler import OcrHandler
from evidence_worker.handlers.stamp_handler import StampHandler
from evidence_worker.handlers.versioning import VersionWriter
from evidence_worker.handlers.wash_handler import WashHandler
from evidence_worker.jobs.models import JobType
from evidence_worker.jobs.params import parse_job_params
from evidence_worker.pdf.factory import PdfExtractorFactory
from evidence_worker.pdf.stamper import PdfStamper
from evidence_worker.storage.file_loader import FileLoader
from evidence_worker.storage.version_store import VersionStore
from evidence_worker.wash.scanner import WashScanner
from evidence_worker.worker.progress import ProgressReporter


class JobDispatcher:
    """Routes a job to the handler registered for its type."""

    def __init__(self, handlers: Mapping[str, BaseJobHandler]) -> None:
        self._handlers = dict(handlers)

    def dispatch(self, job: JobRecord, progress: ProgressReporter) -> str | None:
        """Validate params and run the handler. Returns the result version ID, if any.

        Raises:
            UnsupportedJobTypeError: if no handler is registered for the job type.
            InvalidJobParamsError: if the params do not fit the job type.
        """
        handler = self._handlers.get(job.job_type)
        if handler is None:
            raise UnsupportedJobTypeError(f"Unknown job type: {job.job_type}")
        params = parse_job_params(job.job_type, job.job_params)
        return handler.handle(job, params, progress)


def build_dispatcher(settings: Settings) -> JobDispatcher:
    """Build a JobDispatcher with every handler wired to its adapters."""
    storage_root = Path(settings.storage_root)
    doc_repo = DocumentsRepository()
    versions_repo = VersionsRepository()
    reports_repo = ReportsRepository()
    file_loader = FileLoader(storage_root)
    version_writer = VersionWriter(
        versions_repo, VersionStore(storage_root, settings.artifacts_dir)
    )
    stamper = PdfStamper()
    pdf_extractor = PdfExtractorFactory.create(settings)

    return JobDispatcher(
        {
            JobType.BATES.value: BatesHandler(
                doc_repo=doc_repo,
                bates_repo=BatesRepository(),
                versions_repo=versions_repo,
                file_loader=file_loader,
                version_writer=version_writer,
                stamper=stamper,
            ),
            JobType.STAMP.value: StampHandler(
                doc_repo=doc_repo,
                file_loader=file_loader,
                version_writer=version_writer,
                stamper=stamper,
            ),
            JobType.WASH.value: WashHandler(
                doc_repo=doc_repo,
                reports_repo=reports_repo,
                file_loader=file_loader,
                pdf_extractor=pdf_extractor,
                scanner=WashScanner(),
            ),
            JobType.OCR.value: OcrHandler(
                doc_repo=doc_repo,
                reports_repo=reports_repo,
                file_loader=file_loader,
                pdf_extractor=pdf_extractor,
            ),
        }
    )
