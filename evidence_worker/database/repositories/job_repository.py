from typing import Any

import psycopg
from psycopg.rows import dict_row

from evidence_worker.database.connection import get_connection
from evidence_worker.database.models import JobRecord

_JOB_COLUMNS = """
    id, document_id, job_type, job_params, status, progress_percent,
    created_by, error_message, result_version_id,
    created_at, started_at, finished_at
"""


def _row_to_job(row: dict[str, Any]) -> JobRecord:
    return JobRecord(
        id=str(row["id"]),
        document_id=str(row["document_id"]),
        job_type=row["job_type"],
        status=row["status"],
        job_params=row["job_params"] or {},
        progress_percent=row["progress_percent"] or 0,
        created_by=row["created_by"] or "",
        error_message=row["error_message"],
        result_version_id=(
            str(row["result_version_id"]) if row["result_version_id"] else None
        ),
        created_at=row["created_at"],
        started_at=row["started_at"],
        finished_at=row["finished_at"],
    )


class JobRepository:
    """Database operations for the document_jobs table.

    Terminal updates only apply to rows that are still ``running`` so a job can
    never move backwards or leave a terminal state.
    """

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> JobRecord | None:
        """Claim the oldest queued job and mark it running in one transaction."""
        with conn.transaction():
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_JOB_COLUMNS}
                    FROM document_jobs
                    WHERE status = 'queued'
                    ORDER BY created_at ASC
                    LIMIT 1
                    FOR UPDATE SKIP LOCKED
                    """
                )
                row = cur.fetchone()
                if row is None:
                    return None

                cur.execute(
                    """
                    UPDATE document_jobs
                    SET status = 'running', started_at = NOW(), progress_percent = 0
                    WHERE id = %s
                    RETURNING started_at
                    """,
                    (row["id"],),
                )
                updated = cur.fetchone()

        job = _row_to_job(row)
        job.status = "running"
        job.progress_percent = 0
        job.started_at = updated["started_at"] if updated else None
        return job

    def update_progress(self, job_id: str, percent: int) -> None:
        """Raise progress of a running job; lower values are ignored."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE document_jobs
                SET progress_percent = GREATEST(COALESCE(progress_percent, 0), %s)
                WHERE id = %s AND status = 'running'
                """,
                (percent, job_id),
            )
            conn.commit()

    def mark_complete(self, job_id: str, result_version_id: str | None = None) -> bool:
        """Mark a running job complete. Returns False if it was not running."""
        with get_connection() as conn:
            cur = conn.execute(
                """
                UPDATE document_jobs
                SET status = 'complete', progress_percent = 100,
                    finished_at = NOW(), result_version_id = %s
                WHERE id = %s AND status = 'running'
                """,
                (result_version_id, job_id),
            )
            conn.commit()
            return cur.rowcount > 0

    def mark_failed(self, job_id: str, error: str) -> bool:
        """Mark a running job permanently failed. Returns False if it was not running."""
        with get_connection() as conn:
            cur = conn.execute(
                """
                UPDATE document_jobs
                SET status = 'failed', error_message = %s, finished_at = NOW()
                WHERE id = %s AND status = 'running'
                """,
                (error, job_id),
            )
            conn.commit()
            return cur.rowcount > 0

    def fail_stale_running_jobs(self, older_than_seconds: int, error: str) -> list[str]:
        """Fail jobs running for at least *older_than_seconds*; return their ids.

        With 0, every running job is failed.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE document_jobs
                    SET status = 'failed', error_message = %s, finished_at = NOW()
                    WHERE status = 'running'
                      AND (started_at IS NULL
                           OR started_at <= NOW() - %s * INTERVAL '1 second')
                    RETURNING id
                    """,
                    (error, older_than_seconds),
                )
                rows = cur.fetchall()
            conn.commit()
        return [str(row[0]) for row in rows]

    def find_by_id(self, job_id: str) -> JobRecord | None:
        """Find a job by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_JOB_COLUMNS}
                    FROM document_jobs
                    WHERE id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_job(row)
