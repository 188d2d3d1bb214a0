from evidence_worker.database.models import BatesSet, JobRecord
from evidence_worker.database.repositories.bates_repository import BatesRepository
from evidence_worker.database.repositories.documents_repository import DocumentsRepository
from evidence_worker.database.repositories.versions_repository import VersionsRepository
from evidence_worker.handlers.base import BaseJobHandler
from evidence_worker.handlers.exceptions import InvalidJobParamsError
from evidence_worker.handlers.versioning import VersionWriter
from evidence_worker.jobs.models import BatesParams, JobParams
from evidence_worker.logging.logger import Log
from evidence_worker.pdf.exceptions import PdfStampError
from evidence_worker.pdf.placement import Placement
from evidence_worker.pdf.stamper import HELVETICA, PdfStamper, StampStyle
from evidence_worker.storage.file_loader import FileLoader
from evidence_worker.worker.progress import ProgressReporter

DEFAULT_PLACEMENT = Placement.BOTTOM_RIGHT


def format_bates_label(prefix: str, number: int, padding: int) -> str:
    """``format_bates_label("EX", 7, 4) == "EX-0007"``."""
    return f"{prefix}-{str(number).zfill(padding)}"


class BatesHandler(BaseJobHandler):
    """Numbers every page from the set's counter and records the issued range."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        bates_repo: BatesRepository,
        versions_repo: VersionsRepository,
        file_loader: FileLoader,
        version_writer: VersionWriter,
        stamper: PdfStamper,
    ) -> None:
        self._doc_repo = doc_repo
        self._bates_repo = bates_repo
        self._versions_repo = versions_repo
        self._file_loader = file_loader
        self._version_writer = version_writer
        self._stamper = stamper

    def handle(
        self,
        job: JobRecord,
        params: JobParams,
        progress: ProgressReporter,
    ) -> str | None:
        if not isinstance(params, BatesParams):
            raise InvalidJobParamsError("Bates job requires BatesParams")

        document = self._doc_repo.find_by_id(job.document_id)
        bates_set = self._bates_repo.find_set(params.bates_set_id)
        placement = self._set_placement(bates_set, job.id)
        source = self._file_loader.load(document)
        progress.report(10)

        page_count = self._stamper.page_count(source)
        if page_count == 0:
            raise PdfStampError("Document has no pages to number")

        start_number = bates_set.next_number
        end_number = start_number + page_count - 1
        labels = [
            format_bates_label(bates_set.prefix, number, bates_set.padding)
            for number in range(start_number, end_number + 1)
        ]
        style = StampStyle(
            font_name=HELVETICA,
            font_size=bates_set.font_size,
            placement=placement,
        )
        stamped = self._stamper.stamp(source, labels, style)
        progress.report(50)

        version_id = self._version_writer.write(
            document,
            job,
            operation="bates",
            operation_params={
                "batesSetId": bates_set.id,
                "prefix": bates_set.prefix,
                "startNumber": start_number,
                "endNumber": end_number,
                "placement": placement.value,
                "fontSize": bates_set.font_size,
            },
            data=stamped,
            record=lambda version: self._versions_repo.create_bates_version(
                version, bates_set.id, start_number, end_number
            ),
        )
        progress.report(90)

        Log.info(
            f"Bates {labels[0]}..{labels[-1]} on document "
            f"{document.id} ({page_count} pages), version {version_id}",
            job_id=job.id,
        )
        return version_id

    @staticmethod
    def _set_placement(bates_set: BatesSet, job_id: str) -> Placement:
        try:
            return Placement.parse(bates_set.placement)
        except ValueError:
            Log.warning(
                f"Bates set {bates_set.id} has unknown placement "
                f"'{bates_set.placement}'; using {DEFAULT_PLACEMENT.value}",
                job_id=job_id,
            )
            return DEFAULT_PLACEMENT
