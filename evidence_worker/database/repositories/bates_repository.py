from psycopg.rows import dict_row

from evidence_worker.database.connection import get_connection
from evidence_worker.database.models import BatesRange, BatesSet
from evidence_worker.handlers.exceptions import BatesSetNotFoundError


class BatesRepository:
    """Reads Bates sets and the ranges issued from them.

    The counter itself only advances inside
    ``VersionsRepository.create_bates_version``.
    """

    def find_set(self, bates_set_id: str) -> BatesSet:
        """Find a Bates set by ID, applying column defaults for NULLs.

        Raises:
            BatesSetNotFoundError: if no set with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, prefix, padding, placement, font_size, next_number
                    FROM bates_sets
                    WHERE id = %s
                    """,
                    (bates_set_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise BatesSetNotFoundError("Bates set not found")

        defaults = BatesSet(id="", prefix="")
        return BatesSet(
            id=str(row["id"]),
            prefix=row["prefix"],
            padding=row["padding"] or defaults.padding,
            placement=row["placement"] or defaults.placement,
            font_size=row["font_size"] or defaults.font_size,
            next_number=row["next_number"] or defaults.next_number,
        )

    def find_ranges(self, bates_set_id: str) -> list[BatesRange]:
        """List ranges issued from a set, lowest numbers first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, bates_set_id, document_id, version_id,
                           start_number, end_number
                    FROM bates_ranges
                    WHERE bates_set_id = %s
                    ORDER BY start_number
                    """,
                    (bates_set_id,),
                )
                rows = cur.fetchall()

        return [
            BatesRange(
                id=str(row["id"]),
                bates_set_id=str(row["bates_set_id"]),
                document_id=str(row["document_id"]),
                version_id=str(row["version_id"]) if row["version_id"] else None,
                start_number=row["start_number"],
                end_number=row["end_number"],
            )
            for row in rows
        ]
