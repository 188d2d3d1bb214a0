import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] [job=%(job_id)s] %(message)s"

# pdfplumber parses through pdfminer, which logs every malformed object.
_NOISY_LOGGERS = ("pdfminer", "psycopg.pool")


class _JobContextFilter(logging.Filter):
    """Fills ``job_id`` for records logged outside a job."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "job_id"):
            record.job_id = "-"
        return True


class Log:
    """Worker-wide logging facade.

    Keyword arguments become record attributes, so ``Log.info(msg, job_id=...)``
    tags the line with the job it belongs to.
    """

    _logger: logging.Logger = logging.getLogger("evidence_worker")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Send records at *log_level* and above to stdout."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.addFilter(_JobContextFilter())
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            cls._logger.addHandler(handler)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra=context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra=context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra=context)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra=context)
