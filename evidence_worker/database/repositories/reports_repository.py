from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from evidence_worker.database.connection import get_connection
from evidence_worker.database.models import OcrText, PdfDocument


class ReportsRepository:
    """Writes unversioned findings: wash reports and extracted text."""

    def create_wash_report(
        self,
        document: PdfDocument,
        policy: str,
        detections: list[dict[str, Any]],
        summary: dict[str, Any],
        created_by: str,
    ) -> str:
        """Insert a wash report and return its ID."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO pdf_wash_reports
                    (workspace_id, matter_id, document_id, policy,
                     detections, summary, created_by)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (
                        document.workspace_id,
                        document.matter_id,
                        document.id,
                        policy,
                        Jsonb(detections),
                        Jsonb(summary),
                        created_by,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT INTO pdf_wash_reports returned no id")
        return str(row[0])

    def upsert_ocr_text(
        self,
        document_id: str,
        full_text: str,
        confidence_summary: dict[str, Any],
    ) -> None:
        """Replace the extracted text of a document, inserting the row if absent."""
        with get_connection() as conn:
            with conn.transaction():
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE document_ocr_text
                        SET full_text = %s, confidence_summary = %s
                        WHERE document_id = %s
                        """,
                        (full_text, Jsonb(confidence_summary), document_id),
                    )
                    if cur.rowcount == 0:
                        cur.execute(
                            """
                            INSERT INTO document_ocr_text
                            (document_id, full_text, confidence_summary)
                            VALUES (%s, %s, %s)
                            """,
                            (document_id, full_text, Jsonb(confidence_summary)),
                        )

    def find_ocr_text(self, document_id: str) -> list[OcrText]:
        """Return every extracted-text row for a document."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, full_text, confidence_summary
                    FROM document_ocr_text
                    WHERE document_id = %s
                    """,
                    (document_id,),
                )
                rows = cur.fetchall()

        return [
            OcrText(
                id=str(row["id"]),
                document_id=str(row["document_id"]),
                full_text=row["full_text"] or "",
                confidence_summary=row["confidence_summary"] or {},
            )
            for row in rows
        ]
