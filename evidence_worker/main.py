import signal
from types import FrameType

from evidence_worker.config.settings import Settings
from evidence_worker.database.connection import close_pool, init_pool
from evidence_worker.database.repositories.job_repository import JobRepository
from evidence_worker.handlers.dispatcher import build_dispatcher
from evidence_worker.logging.logger import Log
from evidence_worker.worker.job_runner import JobRunner
from evidence_worker.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        dispatcher = build_dispatcher(settings)
        job_repo = JobRepository()
        job_runner = JobRunner(dispatcher, job_repo)
        worker = Worker(job_repo, job_runner, settings)

        def _request_stop(signum: int, _frame: FrameType | None) -> None:
            Log.info(f"Received signal {signum}, stopping after the current job")
            worker.stop()

        signal.signal(signal.SIGTERM, _request_stop)
        signal.signal(signal.SIGINT, _request_stop)
        worker.start()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
