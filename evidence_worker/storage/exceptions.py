class StorageError(Exception):
    """Base exception for derived-file storage errors."""


class VersionIntegrityError(StorageError):
    """Raised when stored bytes do not hash to the recorded sha256."""


class VersionFileExistsError(StorageError):
    """Raised when a derived version file would overwrite an existing one."""
