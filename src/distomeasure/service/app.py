from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError

from .._version import __version__
from ..formatting import format_length
from ..models import JobRecord, WindowRecord
from ..parsers.measurement import classify_measurement
from ..parsers.units import Unit
from ..utils.logging import log_commit
from ..workflow import WindowNotFoundError, commit_field, summarize_window

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="distomeasure API", version=__version__)


class ParseIn(BaseModel):
    raw: str = Field(..., description="Raw field text")
    units: Unit = Unit.INCHES


class ParseOut(BaseModel):
    raw: str
    units: Unit
    form: Optional[str] = None
    value: Optional[float] = None
    display: Optional[str] = None


class SummaryIn(BaseModel):
    units: Unit = Unit.INCHES
    window: WindowRecord


class CommitIn(BaseModel):
    record: JobRecord
    window_id: str
    path: str = Field(..., description="Dotted field path, e.g. width.top")
    raw: str


class CommitOut(BaseModel):
    text: str
    normalized: bool
    summary: Dict[str, Any]
    record: Dict[str, Any]


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__, "units": [unit.value for unit in Unit]}


@app.post("/parse", response_model=ParseOut)
def parse(payload: ParseIn) -> ParseOut:
    parsed = classify_measurement(payload.raw, payload.units)
    if parsed is None or parsed.value is None:
        return ParseOut(raw=payload.raw, units=payload.units, form=parsed.form.value if parsed else None)
    return ParseOut(
        raw=payload.raw,
        units=payload.units,
        form=parsed.form.value,
        value=parsed.value,
        display=format_length(parsed.value),
    )


@app.post("/windows/summary")
def window_summary(payload: SummaryIn) -> Dict[str, Any]:
    return summarize_window(payload.window, payload.units).as_dict()


@app.post("/windows/summaries")
def job_summaries(record: JobRecord) -> List[Dict[str, Any]]:
    return [summarize_window(window, record.job.units).as_dict() for window in record.windows]


@app.post("/commit", response_model=CommitOut)
def commit(payload: CommitIn) -> CommitOut:
    record = payload.record
    try:
        result = commit_field(record, payload.window_id, payload.path, payload.raw)
    except WindowNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except KeyError as exc:
        raise HTTPException(status_code=422, detail=f"Unknown field path '{payload.path}'") from exc
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    log_commit(LOGGER, result)
    return CommitOut(
        text=result.text,
        normalized=result.normalized,
        summary=result.summary.as_dict(),
        record=record.to_payload(),
    )
