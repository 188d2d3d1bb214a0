from psycopg.rows import dict_row

from evidence_worker.database.connection import get_connection
from evidence_worker.database.models import PdfDocument
from evidence_worker.handlers.exceptions import DocumentNotFoundError


def _optional_str(value: object) -> str | None:
    return str(value) if value is not None else None


class DocumentsRepository:
    """Read-only access to the pdf_documents table."""

    def find_by_id(self, document_id: str) -> PdfDocument:
        """Find a source document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, storage_key, matter_id, workspace_id
                    FROM pdf_documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError("Document not found")

        return PdfDocument(
            id=str(row["id"]),
            storage_key=row["storage_key"],
            matter_id=_optional_str(row["matter_id"]),
            workspace_id=_optional_str(row["workspace_id"]),
        )
