"""Validates raw job_params JSON and builds the typed params for a job type."""

from typing import Any

from evidence_worker.handlers.exceptions import InvalidJobParamsError
from evidence_worker.jobs.models import (
    BatesParams,
    JobParams,
    JobType,
    OcrParams,
    StampParams,
    WashParams,
)
from evidence_worker.pdf.placement import Placement


def parse_job_params(job_type: str, raw: Any) -> JobParams:
    """Validate *raw* against the params shape of *job_type*.

    Raises:
        InvalidJobParamsError: on an unknown job type or malformed params.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise InvalidJobParamsError("job_params must be an object")

    try:
        kind = JobType(job_type)
    except ValueError:
        raise InvalidJobParamsError(f"Unknown job type: {job_type}") from None

    if kind is JobType.BATES:
        return _build_bates(raw)
    if kind is JobType.STAMP:
        return _build_stamp(raw)
    if kind is JobType.WASH:
        return _build_wash(raw)
    return OcrParams()


def _build_bates(raw: dict[str, Any]) -> BatesParams:
    bates_set_id = raw.get("batesSetId")
    if not bates_set_id or not isinstance(bates_set_id, str):
        raise InvalidJobParamsError("'batesSetId' must be a non-empty string")
    return BatesParams(bates_set_id=bates_set_id)


def _build_stamp(raw: dict[str, Any]) -> StampParams:
    defaults = StampParams()

    stamp_type = raw.get("stampType") or defaults.stamp_type
    if not isinstance(stamp_type, str):
        raise InvalidJobParamsError("'stampType' must be a string")

    placement = raw.get("placement") or defaults.placement
    if not isinstance(placement, str):
        raise InvalidJobParamsError("'placement' must be a string")
    try:
        Placement.parse(placement)
    except ValueError as exc:
        raise InvalidJobParamsError(str(exc)) from exc

    font_size = raw.get("fontSize") or defaults.font_size
    if isinstance(font_size, bool) or not isinstance(font_size, (int, float)):
        raise InvalidJobParamsError("'fontSize' must be a number")
    if font_size <= 0:
        raise InvalidJobParamsError("'fontSize' must be positive")

    return StampParams(stamp_type=stamp_type, placement=placement, font_size=font_size)


def _build_wash(raw: dict[str, Any]) -> WashParams:
    policy = raw.get("policy") or WashParams().policy
    if not isinstance(policy, str):
        raise InvalidJobParamsError("'policy' must be a string")
    return WashParams(policy=policy)
