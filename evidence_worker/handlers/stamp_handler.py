from evidence_worker.database.models import JobRecord
from evidence_worker.database.repositories.documents_repository import DocumentsRepository
from evidence_worker.handlers.base import BaseJobHandler
from evidence_worker.handlers.exceptions import InvalidJobParamsError
from evidence_worker.handlers.versioning import VersionWriter
from evidence_worker.jobs.models import JobParams, StampParams
from evidence_worker.logging.logger import Log
from evidence_worker.pdf.placement import Placement
from evidence_worker.pdf.stamper import HELVETICA_BOLD, PdfStamper, StampStyle
from evidence_worker.storage.file_loader import FileLoader
from evidence_worker.worker.progress import ProgressReporter

STAMP_COLOR = (1.0, 0.0, 0.0)
STAMP_OPACITY = 0.4


class StampHandler(BaseJobHandler):
    """Stamps a confidentiality label on every page. Holds no shared state."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        file_loader: FileLoader,
        version_writer: VersionWriter,
        stamper: PdfStamper,
    ) -> None:
        self._doc_repo = doc_repo
        self._file_loader = file_loader
        self._version_writer = version_writer
        self._stamper = stamper

    def handle(
        self,
        job: JobRecord,
        params: JobParams,
        progress: ProgressReporter,
    ) -> str | None:
        if not isinstance(params, StampParams):
            raise InvalidJobParamsError("Stamp job requires StampParams")

        document = self._doc_repo.find_by_id(job.document_id)
        source = self._file_loader.load(document)
        progress.report(10)

        text = params.stamp_type.replace("_", " ")
        style = StampStyle(
            font_name=HELVETICA_BOLD,
            font_size=params.font_size,
            placement=Placement.parse(params.placement),
            color=STAMP_COLOR,
            opacity=STAMP_OPACITY,
        )
        page_count = self._stamper.page_count(source)
        stamped = self._stamper.stamp(source, [text] * page_count, style)
        progress.report(50)

        version_id = self._version_writer.write(
            document,
            job,
            operation="stamp",
            operation_params={
                "stampType": params.stamp_type,
                "placement": params.placement,
                "fontSize": params.font_size,
            },
            data=stamped,
            variant=params.stamp_type,
        )
        progress.report(90)

        Log.info(
            f"Stamped '{text}' on {page_count} pages of document "
            f"{document.id}, version {version_id}",
            job_id=job.id,
        )
        return version_id
