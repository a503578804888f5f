"""
accident_analyzer/services/accident_analysis_service.py

Service layer for one accident analysis request.

Each call builds its own AccidentParser, so concurrent requests never share
an identifier lookup table.
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache
from typing import Any, BinaryIO, Mapping, Sequence

from accident_analyzer.config import get_analysis_settings
from accident_analyzer.services.accident_parser import STATUS_ERROR, SUMMARY_TOTAL_VALID, AccidentParser
from accident_analyzer.services.csv_reader_service import AccidentCSVReader

logger = logging.getLogger(__name__)


class AccidentAnalysisService:
    """
    Coordinates CSV decoding, the validation pipeline, and logging.
    """

    def __init__(
        self,
        *,
        log_validation_errors: bool,
        max_logged_errors: int,
        csv_reader: AccidentCSVReader | None = None,
    ) -> None:
        self._log_validation_errors = log_validation_errors
        self._max_logged_errors = max(0, max_logged_errors)
        self._csv_reader = csv_reader or AccidentCSVReader()

    def analyze_records(
        self,
        records: Sequence[Mapping[str, Any]] | None,
        *,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Validate and aggregate records, returning the report.

        Raises AnalysisInputError when ``records`` is empty or absent.
        """

        parser = AccidentParser(records)
        logger.info("Accident analysis started rows=%d", parser.record_count)

        report = parser.analyze(now=now)

        if report["status"] == STATUS_ERROR:
            self._log_errors(report["syntacticAnalysis"]["errors"])
        logger.info(
            "Accident analysis finished status=%s rows=%d valid=%s",
            report["status"],
            parser.record_count,
            report["summary"].get(SUMMARY_TOTAL_VALID),
        )
        return report

    def analyze_csv(
        self,
        raw_file: BinaryIO,
        *,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Decode an uploaded CSV stream and analyze its rows.

        Raises CSVHeaderValidationError for undecodable input and
        AnalysisInputError when the file holds no data rows.
        """

        records = self._csv_reader.read_records(raw_file)
        return self.analyze_records(records, now=now)

    def _log_errors(self, errors: Sequence[Mapping[str, Any]]) -> None:
        if not self._log_validation_errors:
            return

        for error in errors[: self._max_logged_errors]:
            logger.warning(
                "Accident validation error row=%s field=%s message=%s value=%r",
                error.get("row"),
                error.get("column", error.get("field")),
                error.get("message"),
                error.get("value"),
            )
        if len(errors) > self._max_logged_errors:
            logger.warning(
                "Suppressed %d further accident validation errors",
                len(errors) - self._max_logged_errors,
            )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_accident_analysis_service() -> AccidentAnalysisService:
    """
    Build and cache the analysis service with env-driven settings.
    """
    settings = get_analysis_settings()
    return AccidentAnalysisService(
        log_validation_errors=settings.log_validation_errors,
        max_logged_errors=settings.max_logged_errors,
        csv_reader=AccidentCSVReader(encoding=settings.csv_encoding),
    )
