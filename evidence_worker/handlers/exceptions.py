class JobError(Exception):
    """Base exception for all job-handling errors."""


class DocumentNotFoundError(JobError):
    """Raised when a document cannot be found in the database."""


class BatesSetNotFoundError(JobError):
    """Raised when the Bates set referenced by a job does not exist."""


class SourceFileNotFoundError(JobError):
    """Raised when the source PDF bytes are missing from storage."""


class UnsupportedJobTypeError(JobError):
    """Raised when no handler is registered for a job type."""


class InvalidJobParamsError(JobError):
    """Raised when job params do not match the shape required by the job type."""


class BatesCounterConflictError(JobError):
    """Raised when a Bates set counter moved while a job was numbering pages."""
