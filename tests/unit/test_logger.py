import logging

import pytest

from evidence_worker.logging.logger import LOG_FORMAT, Log, _JobContextFilter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("evidence_worker", logging.INFO, __file__, 1, "msg", None, None)
    record.__dict__.update(extra)
    return record


class TestJobContextFilter:
    def test_defaults_job_id_outside_a_job(self) -> None:
        record = _record()

        assert _JobContextFilter().filter(record) is True
        assert logging.Formatter(LOG_FORMAT).format(record).endswith("[job=-] msg")

    def test_keeps_job_id_passed_as_context(self) -> None:
        record = _record(job_id="job-1")

        _JobContextFilter().filter(record)

        assert record.job_id == "job-1"


class TestConfigure:
    def test_configure_is_idempotent(self) -> None:
        Log.configure("debug")
        Log.configure("info")

        logger = logging.getLogger("evidence_worker")
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
        assert logging.getLogger("pdfminer").level == logging.WARNING

    def test_context_reaches_record(self, caplog: pytest.LogCaptureFixture) -> None:
        Log.configure("info")

        Log.info("claimed", job_id="job-9")

        assert caplog.records[-1].job_id == "job-9"
