"""Write-once storage for derived document versions.

Every version file is written through a temp file and an atomic rename, then
read back and hashed so the sha256 recorded in the database always describes
the bytes actually on disk.
"""

import hashlib
import os
import re
import tempfile
from pathlib import Path

from evidence_worker.database.models import PdfDocument
from evidence_worker.logging.logger import Log
from evidence_worker.storage.exceptions import VersionFileExistsError, VersionIntegrityError
from evidence_worker.storage.file_loader import resolve_storage_key

NO_MATTER = "no-matter"
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9_]+")


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class VersionStore:
    """Places derived PDFs under ``{artifacts_dir}/{matter}/{document}/``."""

    def __init__(self, storage_root: Path, artifacts_dir: str) -> None:
        self._storage_root = storage_root
        self._artifacts_dir = artifacts_dir

    def storage_key_for(
        self,
        document: PdfDocument,
        version_number: int,
        operation: str,
        variant: str | None = None,
    ) -> str:
        """Build ``{artifacts_dir}/{matter|no-matter}/{doc}/v{n}-{op}[-{variant}].pdf``."""
        filename = f"v{version_number}-{operation}"
        if variant:
            safe_variant = _UNSAFE_FILENAME_CHARS.sub("-", variant.lower()).strip("-")
            if safe_variant:
                filename += f"-{safe_variant}"
        matter = document.matter_id or NO_MATTER
        return str(Path(self._artifacts_dir) / matter / document.id / f"{filename}.pdf")

    def write(self, storage_key: str, data: bytes) -> str:
        """Persist *data* at *storage_key* and return its verified sha256.

        Raises:
            VersionFileExistsError: if a file already exists at *storage_key*.
            VersionIntegrityError: if the bytes read back do not match *data*.
        """
        target = resolve_storage_key(self._storage_root, storage_key)
        if target.exists():
            message = (
                f"Version file already exists: {target}. It has no committed version "
                "record (left by an interrupted write); remove it after checking it "
                "is not referenced by document_versions, then resubmit the job"
            )
            Log.error(message)
            raise VersionFileExistsError(message)
        target.parent.mkdir(parents=True, exist_ok=True)

        expected = sha256_hex(data)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        try:
            self.verify(storage_key, expected)
        except VersionIntegrityError:
            target.unlink(missing_ok=True)
            raise
        Log.debug(f"Wrote {len(data)} bytes to {storage_key} (sha256 {expected})")
        return expected

    def verify(self, storage_key: str, sha256_hash: str) -> None:
        """Re-hash the file at *storage_key* and compare with *sha256_hash*.

        Raises:
            VersionIntegrityError: on a missing file or hash mismatch.
        """
        path = resolve_storage_key(self._storage_root, storage_key)
        if not path.is_file():
            raise VersionIntegrityError(f"Version file missing: {storage_key}")
        actual = sha256_hex(path.read_bytes())
        if actual != sha256_hash:
            raise VersionIntegrityError(
                f"sha256 mismatch for {storage_key}: expected {sha256_hash}, got {actual}"
            )

    def discard(self, storage_key: str) -> None:
        """Remove a file whose version record was never committed."""
        path = resolve_storage_key(self._storage_root, storage_key)
        path.unlink(missing_ok=True)
        Log.warning(f"Discarded uncommitted version file {storage_key}")
