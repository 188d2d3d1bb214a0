from evidence_worker.jobs.models import JobStatus

_ALLOWED: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.QUEUED: frozenset({JobStatus.RUNNING}),
    JobStatus.RUNNING: frozenset({JobStatus.COMPLETE, JobStatus.FAILED}),
    JobStatus.COMPLETE: frozenset(),
    JobStatus.FAILED: frozenset(),
}


def is_allowed_transition(current: str, target: str) -> bool:
    """Return True if a job may move from *current* to *target*.

    Unknown status strings are never allowed to transition.
    """
    try:
        current_status = JobStatus(current)
        target_status = JobStatus(target)
    except ValueError:
        return False
    return target_status in _ALLOWED[current_status]
