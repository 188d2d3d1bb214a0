import threading

from evidence_worker.config.settings import Settings
from evidence_worker.database.connection import get_connection
from evidence_worker.database.models import JobRecord
from evidence_worker.database.repositories.job_repository import JobRepository
from evidence_worker.logging.logger import Log
from evidence_worker.worker.job_runner import JobRunner

STALE_JOB_MESSAGE = "Job abandoned: worker stopped while the job was running"


class Worker:
    """Poll loop: claim -> run -> sleep when idle.

    At most one poll cycle, and therefore one job, is active at a time. The
    claim is atomic in the database, but the job table is still assumed to
    have a single worker process.
    """

    def __init__(
        self,
        job_repo: JobRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._settings = settings
        self._busy = threading.Lock()
        self._stop_event = threading.Event()

    @property
    def is_busy(self) -> bool:
        return self._busy.locked()

    def start(self, max_jobs: int | None = None) -> None:
        """Run the poll loop until stop() is called or the process is interrupted.

        If max_jobs is set, stop after processing that many jobs (for testing).
        """
        Log.info("Worker started, polling for jobs")
        self._stop_event.clear()
        self._recover_abandoned_jobs()
        jobs_done = 0
        try:
            while not self._stop_event.is_set():
                if max_jobs is not None and jobs_done >= max_jobs:
                    break
                if self.poll_once():
                    jobs_done += 1
                else:
                    Log.debug("No jobs available, sleeping")
                    self._stop_event.wait(self._settings.job_poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        Log.info(f"Worker stopped after {jobs_done} jobs")

    def stop(self) -> None:
        """Ask the loop to exit once the in-flight job, if any, has finished."""
        self._stop_event.set()

    def poll_once(self) -> bool:
        """Claim and run the oldest queued job. Returns True if a job ran.

        Returns False without claiming when another poll cycle is in flight.
        """
        if not self._busy.acquire(blocking=False):
            Log.debug("Previous poll cycle still running, skipping")
            return False
        try:
            job = self._try_claim_job()
            if job is None:
                self._sweep_stale_jobs()
                return False
            try:
                self._job_runner.run(job)
            except Exception as exc:
                Log.error(f"Poll error while running job: {exc}", job_id=job.id)
            return True
        finally:
            self._busy.release()

    def _try_claim_job(self) -> JobRecord | None:
        """Attempt to claim the next queued job. Gracefully handle DB errors."""
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None

    def _recover_abandoned_jobs(self) -> None:
        """Fail every job a previous worker process left running."""
        self._fail_running_jobs(older_than_seconds=0)

    def _sweep_stale_jobs(self) -> None:
        # Called with the busy lock held, so no job of this process is running.
        timeout = self._settings.stale_job_timeout_seconds
        if timeout > 0:
            self._fail_running_jobs(older_than_seconds=timeout)

    def _fail_running_jobs(self, older_than_seconds: int) -> None:
        try:
            failed = self._job_repo.fail_stale_running_jobs(
                older_than_seconds, STALE_JOB_MESSAGE
            )
        except Exception as exc:
            Log.warning(f"Database error while sweeping abandoned jobs: {exc}")
            return
        for job_id in failed:
            Log.warning("Left running by a stopped worker; marked failed", job_id=job_id)
