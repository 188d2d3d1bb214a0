from evidence_worker.database.repositories.job_repository import JobRepository


class ProgressReporter:
    """Forwards job progress to the job row, never letting it go backwards."""

    def __init__(self, job_repo: JobRepository, job_id: str) -> None:
        self._job_repo = job_repo
        self._job_id = job_id
        self._percent = 0

    @property
    def percent(self) -> int:
        return self._percent

    def report(self, percent: int) -> None:
        percent = max(0, min(100, percent))
        if percent <= self._percent:
            return
        self._percent = percent
        self._job_repo.update_progress(self._job_id, percent)
