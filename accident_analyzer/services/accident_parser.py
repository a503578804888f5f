"""
accident_analyzer/services/accident_parser.py

Staged validation pipeline for one batch of accident records:

    1. FieldClassifier.classify(): tokens with row/position metadata
    2. FormatValidator.validate(): pattern rules, whole-row rejection
    3. CoherenceValidator.validate(): domain predicates, lookup table
    4. AccidentParser.generate_report(): aggregates and the final report

One parser instance serves one analysis. The identifier lookup table is
rebuilt on every coherence pass and is never shared between instances.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from accident_analyzer.domain.accident import (
    CoherenceValidationResult,
    FormatValidationResult,
    LexicalResult,
)
from accident_analyzer.mappers.field_classifier import FieldClassifier
from accident_analyzer.services.aggregation_service import AggregationService
from accident_analyzer.validators.coherence_validator import CoherenceValidator
from accident_analyzer.validators.format_validator import FormatValidator

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

SUMMARY_TOTAL_ANALYZED = "Total de accidentes analizados"
SUMMARY_TOTAL_VALID = "Accidentes validos"
SUMMARY_TOTAL_WITH_ERRORS = "Accidentes con errores"
SUMMARY_TOTAL_CASUALTIES = "Total de victimas"
SUMMARY_ALCOHOL = "Accidentes con alcohol involucrado"
SUMMARY_SPEEDING = "Accidentes con exceso de velocidad"
SUMMARY_BY_SEVERITY = "Accidentes por gravedad"

MISSING_INPUT_MESSAGE = "Ingrese un archivo CSV para analizar."


class AnalysisInputError(ValueError):
    """
    Raised when an analysis is requested without any input records.
    """


class AccidentParser:
    """
    Runs the classify → format → coherence → report pipeline over one batch.
    """

    def __init__(
        self,
        records: Sequence[Mapping[str, Any]] | None,
        *,
        classifier: FieldClassifier | None = None,
        format_validator: FormatValidator | None = None,
        coherence_validator: CoherenceValidator | None = None,
        aggregator: AggregationService | None = None,
    ) -> None:
        if not records:
            raise AnalysisInputError(MISSING_INPUT_MESSAGE)
        self._records = list(records)
        self._classifier = classifier or FieldClassifier()
        self._format_validator = format_validator or FormatValidator()
        self._coherence_validator = coherence_validator or CoherenceValidator()
        self._aggregator = aggregator or AggregationService()
        self.symbol_table: dict[str, dict[str, str]] = {}

    @property
    def record_count(self) -> int:
        return len(self._records)

    def classify_fields(self) -> LexicalResult:
        return self._classifier.classify(self._records)

    def validate_format(self, lexical_result: LexicalResult) -> FormatValidationResult:
        return self._format_validator.validate(lexical_result)

    def validate_coherence(
        self,
        format_result: FormatValidationResult,
        *,
        now: datetime | None = None,
    ) -> CoherenceValidationResult:
        """
        Run coherence checks against a fresh lookup table for this run.
        """

        self.symbol_table = {}
        return self._coherence_validator.validate(
            format_result,
            symbol_table=self.symbol_table,
            now=now or datetime.now(tz=timezone.utc),
        )

    def analyze(self, *, now: datetime | None = None) -> dict[str, Any]:
        """
        Run every stage and return the report.

        ``now`` is the moment dates are compared against; it defaults to the
        current UTC time.
        """

        lexical_result = self.classify_fields()
        format_result = self.validate_format(lexical_result)
        coherence_result = self.validate_coherence(format_result, now=now)
        return self.generate_report(coherence_result)

    def generate_report(self, coherence_result: CoherenceValidationResult) -> dict[str, Any]:
        """
        Assemble the report. Key order is part of the persisted format.
        """

        tokens = [token.to_dict() for token in self.classify_fields().tokens]
        total = self.record_count

        if not coherence_result.is_valid:
            errors = [error.to_dict() for error in coherence_result.errors]
            return {
                "status": STATUS_ERROR,
                "lexicalAnalysis": {"tokens": tokens},
                "syntacticAnalysis": {"errors": errors, "isValid": False},
                "semanticAnalysis": {"errors": list(errors), "isValid": False},
                "summary": {
                    SUMMARY_TOTAL_ANALYZED: total,
                    SUMMARY_TOTAL_VALID: 0,
                    SUMMARY_TOTAL_WITH_ERRORS: total,
                },
            }

        valid_rows = coherence_result.valid_rows
        aggregates = self._aggregator.aggregate(valid_rows)
        severity_summary = ", ".join(
            f"{severity}: {count}" for severity, count in aggregates.severity_counts.items()
        )

        return {
            "status": STATUS_SUCCESS,
            "lexicalAnalysis": {"tokens": tokens},
            "syntacticAnalysis": {"isValid": True, "validatedRows": len(valid_rows)},
            "semanticAnalysis": {
                "isValid": True,
                "symbolTable": [[key, dict(record)] for key, record in coherence_result.symbol_table],
            },
            "summary": {
                SUMMARY_TOTAL_ANALYZED: total,
                SUMMARY_TOTAL_VALID: len(valid_rows),
                SUMMARY_TOTAL_CASUALTIES: aggregates.total_casualties,
                SUMMARY_ALCOHOL: aggregates.alcohol_involved,
                SUMMARY_SPEEDING: aggregates.speeding_involved,
                SUMMARY_BY_SEVERITY: severity_summary,
            },
            "detailedData": aggregates.to_dict(),
        }


def serialize_report(report: Mapping[str, Any]) -> str:
    """
    Serialize a report verbatim for download, preserving key order.
    """

    return json.dumps(report, ensure_ascii=False, indent=2)
