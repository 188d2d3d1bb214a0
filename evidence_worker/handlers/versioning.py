from collections.abc import Callable
from typing import Any

from evidence_worker.database.models import JobRecord, NewVersion, PdfDocument
from evidence_worker.database.repositories.versions_repository import VersionsRepository
from evidence_worker.storage.version_store import VersionStore


class VersionWriter:
    """Writes derived bytes to the version store and records the version row.

    If recording fails the written file is discarded, so a version file only
    survives together with its database row.
    """

    def __init__(self, versions_repo: VersionsRepository, version_store: VersionStore) -> None:
        self._versions_repo = versions_repo
        self._version_store = version_store

    def write(
        self,
        document: PdfDocument,
        job: JobRecord,
        operation: str,
        operation_params: dict[str, Any],
        data: bytes,
        variant: str | None = None,
        record: Callable[[NewVersion], str] | None = None,
    ) -> str:
        """Persist *data* as the next version of *document* and return the version ID.

        *record* replaces the plain version insert when the version must be
        committed together with other rows.
        """
        version_number = self._versions_repo.next_version_number(document.id)
        storage_key = self._version_store.storage_key_for(
            document, version_number, operation, variant
        )
        sha256_hash = self._version_store.write(storage_key, data)
        new_version = NewVersion(
            document_id=document.id,
            version_number=version_number,
            operation_type=operation,
            operation_params=operation_params,
            storage_key=storage_key,
            sha256_hash=sha256_hash,
            created_by=job.created_by,
        )
        record = record or self._versions_repo.create_version
        try:
            return record(new_version)
        except Exception:
            self._version_store.discard(storage_key)
            raise
