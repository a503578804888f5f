"""
accident_analyzer/api/routers/accident_analysis.py

Accident analysis HTTP endpoints.

POST /accidents/analyze       JSON body {"records": [...]}
POST /accidents/analyze-csv   multipart CSV upload

Both return the report as JSON. With ``download=true`` the report is
serialized verbatim and returned as a file attachment instead.

All pipeline logic lives in AccidentAnalysisService; the router only handles
HTTP plumbing (serialisation, content-type, error mapping).
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status
from fastapi.responses import JSONResponse, Response

from accident_analyzer.api.dependencies import get_csv_upload
from accident_analyzer.config import AnalysisSettings, get_analysis_settings
from accident_analyzer.schemas.accident_analysis import AccidentRecordsRequest
from accident_analyzer.services.accident_analysis_service import (
    AccidentAnalysisService,
    get_accident_analysis_service,
)
from accident_analyzer.services.accident_parser import AnalysisInputError, serialize_report
from accident_analyzer.services.csv_reader_service import CSVHeaderValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accidents", tags=["accidents"])


# ---------------------------------------------------------------------------
# Serialisation helpers (no business logic)
# ---------------------------------------------------------------------------


def _to_response(report: dict[str, Any], *, download: bool, filename: str) -> Response:
    if not download:
        return JSONResponse(content=report)
    return Response(
        content=serialize_report(report).encode("utf-8"),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _run_analysis(run: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    try:
        return run()
    except (AnalysisInputError, CSVHeaderValidationError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Accident analysis failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Analysis failed; see server logs for details.",
        ) from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/analyze", summary="Analyze decoded accident records")
def analyze_records(
    payload: AccidentRecordsRequest,
    download: bool = Query(default=False, description="Return the report as a JSON file download."),
    service: AccidentAnalysisService = Depends(get_accident_analysis_service),
    settings: AnalysisSettings = Depends(get_analysis_settings),
) -> Response:
    """
    Validate and aggregate accident rows supplied as JSON.
    """

    report = _run_analysis(lambda: service.analyze_records(payload.records))
    return _to_response(report, download=download, filename=settings.report_filename)


@router.post("/analyze-csv", summary="Analyze an uploaded accident CSV")
def analyze_csv(
    file: UploadFile = Depends(get_csv_upload),
    download: bool = Query(default=False, description="Return the report as a JSON file download."),
    service: AccidentAnalysisService = Depends(get_accident_analysis_service),
    settings: AnalysisSettings = Depends(get_analysis_settings),
) -> Response:
    """
    Decode one CSV upload and run the accident validation pipeline on it.
    """

    try:
        report = _run_analysis(lambda: service.analyze_csv(file.file))
    finally:
        file.file.close()

    logger.info("Analyzed CSV upload filename=%r status=%s", file.filename, report["status"])
    return _to_response(report, download=download, filename=settings.report_filename)
