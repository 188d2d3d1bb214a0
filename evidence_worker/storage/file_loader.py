from pathlib import Path

from evidence_worker.database.models import PdfDocument
from evidence_worker.handlers.exceptions import SourceFileNotFoundError


def resolve_storage_key(storage_root: Path, storage_key: str) -> Path:
    """Absolute keys are used as-is; relative keys live under *storage_root*."""
    path = Path(storage_key)
    if path.is_absolute():
        return path
    return storage_root / path


class FileLoader:
    """Resolves the filesystem path of a source document and reads its bytes."""

    def __init__(self, storage_root: Path) -> None:
        self._storage_root = storage_root

    def load(self, document: PdfDocument) -> bytes:
        """Read source document bytes from disk.

        Raises:
            SourceFileNotFoundError: if the file does not exist at the resolved path.
        """
        path = resolve_storage_key(self._storage_root, document.storage_key)
        if not path.is_file():
            raise SourceFileNotFoundError("Source PDF file not found on disk")
        return path.read_bytes()
