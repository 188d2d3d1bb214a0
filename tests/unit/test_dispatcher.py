from unittest.mock import MagicMock

import pytest

from evidence_worker.database.models import JobRecord
from evidence_worker.handlers.bates_handler import BatesHandler
from evidence_worker.handlers.dispatcher import JobDispatcher, build_dispatcher
from evidence_worker.handlers.exceptions import InvalidJobParamsError, UnsupportedJobTypeError
from evidence_worker.handlers.ocr_handler import OcrHandler
from evidence_worker.handlers.stamp_handler import StampHandler
from evidence_worker.handlers.wash_handler import WashHandler
from evidence_worker.jobs.models import StampParams


def _make_job(job_type: str, job_params: dict | None = None) -> JobRecord:
    return JobRecord(
        id="job-1",
        document_id="doc-1",
        job_type=job_type,
        status="running",
        job_params=job_params or {},
    )


class TestDispatch:
    def test_routes_to_registered_handler_with_parsed_params(self) -> None:
        stamp_handler = MagicMock()
        stamp_handler.handle.return_value = "ver-1"
        dispatcher = JobDispatcher({"stamp": stamp_handler})
        job = _make_job("stamp", {"stampType": "PRIVILEGED", "placement": "center"})
        progress = MagicMock()

        result = dispatcher.dispatch(job, progress)

        assert result == "ver-1"
        stamp_handler.handle.assert_called_once_with(
            job, StampParams("PRIVILEGED", "center", 24), progress
        )

    def test_unknown_type_raises_before_any_handler_runs(self) -> None:
        stamp_handler = MagicMock()
        dispatcher = JobDispatcher({"stamp": stamp_handler})

        with pytest.raises(UnsupportedJobTypeError, match="Unknown job type: rotate"):
            dispatcher.dispatch(_make_job("rotate"), MagicMock())

        stamp_handler.handle.assert_not_called()

    def test_invalid_params_raise_before_handler_runs(self) -> None:
        bates_handler = MagicMock()
        dispatcher = JobDispatcher({"bates": bates_handler})

        with pytest.raises(InvalidJobParamsError):
            dispatcher.dispatch(_make_job("bates", {}), MagicMock())

        bates_handler.handle.assert_not_called()


class TestBuildDispatcher:
    def test_registers_all_four_job_types(self) -> None:
        settings = MagicMock(
            storage_root=".", artifacts_dir="uploads/pdf-pro", pdf_engine="pdfplumber"
        )

        dispatcher = build_dispatcher(settings)

        handlers = dispatcher._handlers
        assert isinstance(handlers["bates"], BatesHandler)
        assert isinstance(handlers["stamp"], StampHandler)
        assert isinstance(handlers["wash"], WashHandler)
        assert isinstance(handlers["ocr"], OcrHandler)
