from evidence_worker.database.models import JobRecord
from evidence_worker.database.repositories.job_repository import JobRepository
from evidence_worker.handlers.dispatcher import JobDispatcher
from evidence_worker.jobs.models import JobStatus
from evidence_worker.jobs.status_machine import is_allowed_transition
from evidence_worker.logging.logger import Log
from evidence_worker.worker.progress import ProgressReporter

UNKNOWN_ERROR_MESSAGE = "Unknown error during processing"


class JobRunner:
    """Run one job to a terminal status. Failures are final, never retried."""

    def __init__(self, dispatcher: JobDispatcher, job_repo: JobRepository) -> None:
        self._dispatcher = dispatcher
        self._job_repo = job_repo

    def run(self, job: JobRecord) -> None:
        """Execute a single claimed job with error handling."""
        if not is_allowed_transition(job.status, JobStatus.COMPLETE.value):
            Log.warning(f"Job is {job.status}, not running; skipping", job_id=job.id)
            return
        Log.info(f"Running {job.job_type} job on document {job.document_id}", job_id=job.id)
        progress = ProgressReporter(self._job_repo, job.id)
        try:
            result_version_id = self._dispatcher.dispatch(job, progress)
        except Exception as exc:
            self._handle_failure(job, exc)
            return

        if self._job_repo.mark_complete(job.id, result_version_id):
            Log.info(f"{job.job_type} job completed", job_id=job.id)
        else:
            Log.warning("Job was no longer running; completion not recorded", job_id=job.id)

    def _handle_failure(self, job: JobRecord, exc: Exception) -> None:
        message = str(exc) or UNKNOWN_ERROR_MESSAGE
        Log.error(
            f"{job.job_type} job failed: {type(exc).__name__}: {message}", job_id=job.id
        )
        if not self._job_repo.mark_failed(job.id, message):
            Log.warning("Job was no longer running; failure not recorded", job_id=job.id)
