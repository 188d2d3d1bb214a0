import os
import uuid
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest
from psycopg.types.json import Jsonb

from evidence_worker.config.settings import Settings
from evidence_worker.database.connection import (
    build_conninfo,
    close_pool,
    get_connection,
    init_pool,
)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"
TABLES = (
    "pdf_wash_reports",
    "bates_ranges",
    "document_jobs",
    "document_ocr_text",
    "document_versions",
    "bates_sets",
    "pdf_documents",
)


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "legal_evidence_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        with psycopg.connect(build_conninfo(test_settings), connect_timeout=3) as conn:
            conn.execute(SCHEMA_PATH.read_text())
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env vars")
    init_pool(test_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture(autouse=True)
def clean_tables(integration_pool: None) -> None:
    """Every integration test starts from empty tables."""
    with get_connection() as conn:
        conn.execute(f"TRUNCATE {', '.join(TABLES)} CASCADE")
        conn.commit()


@pytest.fixture
def worker_settings(test_settings: Settings, tmp_path: Path) -> Settings:
    return test_settings.model_copy(
        update={"storage_root": str(tmp_path), "job_poll_interval_seconds": 0}
    )


@pytest.fixture
def seed_document(tmp_path: Path) -> Callable[[bytes], str]:
    """Write a source PDF under tmp_path and insert its pdf_documents row."""

    def _seed(pdf_bytes: bytes) -> str:
        storage_key = f"sources/{uuid.uuid4()}.pdf"
        path = tmp_path / storage_key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(pdf_bytes)
        with get_connection() as conn:
            cur = conn.execute(
                """
                INSERT INTO pdf_documents (workspace_id, matter_id, storage_key)
                VALUES (%s, %s, %s)
                RETURNING id
                """,
                (str(uuid.uuid4()), str(uuid.uuid4()), storage_key),
            )
            row = cur.fetchone()
            conn.commit()
        assert row is not None
        return str(row[0])

    return _seed


@pytest.fixture
def seed_bates_set() -> Callable[..., str]:
    def _seed(prefix: str = "EX", padding: int = 4, next_number: int = 1) -> str:
        with get_connection() as conn:
            cur = conn.execute(
                """
                INSERT INTO bates_sets (prefix, padding, next_number)
                VALUES (%s, %s, %s)
                RETURNING id
                """,
                (prefix, padding, next_number),
            )
            row = cur.fetchone()
            conn.commit()
        assert row is not None
        return str(row[0])

    return _seed


@pytest.fixture
def enqueue_job() -> Callable[..., str]:
    def _enqueue(
        document_id: str,
        job_type: str,
        job_params: dict[str, Any] | None = None,
    ) -> str:
        with get_connection() as conn:
            cur = conn.execute(
                """
                INSERT INTO document_jobs
                (document_id, job_type, job_params, created_by, created_at)
                VALUES (%s, %s, %s, %s, clock_timestamp())
                RETURNING id
                """,
                (document_id, job_type, Jsonb(job_params or {}), "user-7"),
            )
            row = cur.fetchone()
            conn.commit()
        assert row is not None
        return str(row[0])

    return _enqueue

