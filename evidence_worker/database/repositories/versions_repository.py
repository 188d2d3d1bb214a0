from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from evidence_worker.database.connection import get_connection
from evidence_worker.database.models import DocumentVersion, NewVersion
from evidence_worker.handlers.exceptions import BatesCounterConflictError


class VersionsRepository:
    """Append-only access to document_versions, plus the Bates unit of work."""

    def next_version_number(self, document_id: str) -> int:
        """Return max(version_number) + 1 for the document, or 1."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT COALESCE(MAX(version_number), 0) + 1
                    FROM document_versions
                    WHERE document_id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()
        return int(row[0]) if row else 1

    def create_version(self, version: NewVersion) -> str:
        """Insert a version row and return its ID."""
        with get_connection() as conn:
            with conn.transaction():
                with conn.cursor() as cur:
                    version_id = self._insert_version(cur, version)
        return version_id

    def create_bates_version(
        self,
        version: NewVersion,
        bates_set_id: str,
        start_number: int,
        end_number: int,
    ) -> str:
        """Record a Bates-numbered version as one durable unit.

        Advances the set counter to ``end_number + 1`` only if it still equals
        ``start_number``, inserts the version and inserts the range, all in a
        single transaction.

        Raises:
            BatesCounterConflictError: if the set counter no longer equals
                ``start_number``. Nothing is written in that case.
        """
        with get_connection() as conn:
            with conn.transaction():
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE bates_sets
                        SET next_number = %s
                        WHERE id = %s AND COALESCE(next_number, 1) = %s
                        """,
                        (end_number + 1, bates_set_id, start_number),
                    )
                    if cur.rowcount == 0:
                        raise BatesCounterConflictError(
                            f"Bates set {bates_set_id} no longer starts at {start_number}"
                        )
                    version_id = self._insert_version(cur, version)
                    cur.execute(
                        """
                        INSERT INTO bates_ranges
                        (bates_set_id, document_id, version_id, start_number, end_number)
                        VALUES (%s, %s, %s, %s, %s)
                        """,
                        (
                            bates_set_id,
                            version.document_id,
                            version_id,
                            start_number,
                            end_number,
                        ),
                    )
        return version_id

    def find_by_document(self, document_id: str) -> list[DocumentVersion]:
        """List versions of a document in version order."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, version_number, operation_type,
                           operation_params, storage_key, sha256_hash,
                           created_by, created_at
                    FROM document_versions
                    WHERE document_id = %s
                    ORDER BY version_number
                    """,
                    (document_id,),
                )
                rows = cur.fetchall()

        return [
            DocumentVersion(
                id=str(row["id"]),
                document_id=str(row["document_id"]),
                version_number=row["version_number"],
                operation_type=row["operation_type"],
                operation_params=row["operation_params"] or {},
                storage_key=row["storage_key"],
                sha256_hash=row["sha256_hash"],
                created_by=row["created_by"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def _insert_version(self, cur: psycopg.Cursor[Any], version: NewVersion) -> str:
        cur.execute(
            """
            INSERT INTO document_versions
            (document_id, version_number, operation_type, operation_params,
             storage_key, sha256_hash, created_by)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING id
            """,
            (
                version.document_id,
                version.version_number,
                version.operation_type,
                Jsonb(version.operation_params),
                version.storage_key,
                version.sha256_hash,
                version.created_by,
            ),
        )
        row = cur.fetchone()
        if row is None:
            raise RuntimeError("INSERT INTO document_versions returned no id")
        return str(row[0])
