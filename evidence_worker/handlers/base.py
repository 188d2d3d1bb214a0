from abc import ABC, abstractmethod

from evidence_worker.database.models import JobRecord
from evidence_worker.jobs.models import JobParams
from evidence_worker.worker.progress import ProgressReporter


class BaseJobHandler(ABC):
    """Contract for one job type's handler."""

    @abstractmethod
    def handle(
        self,
        job: JobRecord,
        params: JobParams,
        progress: ProgressReporter,
    ) -> str | None:
        """Run the job against the source document.

        Args:
            job: The claimed job row.
            params: Params already validated for this job type.
            progress: Receives 10 after loading, 50 after processing and 90
                after persisting.

        Returns:
            The ID of the created document version, or None for jobs that
            do not create one.

        Raises:
            JobError: on precondition failures or conflicting state.
        """
