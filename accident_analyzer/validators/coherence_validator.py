"""
accident_analyzer/validators/coherence_validator.py

Domain-coherence validation for rows that passed format validation.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping

from accident_analyzer.domain.accident import (
    CoherenceError,
    CoherenceValidationResult,
    FieldKind,
    FormatValidationResult,
    ValidatedRow,
)
from accident_analyzer.validators.rules import COHERENCE_RULES, CoherenceRule

logger = logging.getLogger(__name__)

SYNTHETIC_KEY_PREFIX = "accident-"
SKIPPED_MESSAGE = "No se puede realizar el análisis semántico debido a errores sintácticos."


class CoherenceValidator:
    """
    Applies coherence predicates and records accepted rows in a lookup table.

    The lookup table is owned by the caller and passed in per run, so
    independent analyses never share it.
    """

    def __init__(self, *, rules: Mapping[FieldKind, CoherenceRule] | None = None) -> None:
        self._rules = dict(COHERENCE_RULES if rules is None else rules)

    def validate(
        self,
        format_result: FormatValidationResult,
        *,
        symbol_table: dict[str, dict[str, str]],
        now: datetime,
    ) -> CoherenceValidationResult:
        """
        Validate every format-valid row, or short-circuit on upstream errors.

        Any format error anywhere in the batch skips coherence checking for
        all rows; the format errors are carried forward unchanged.
        """

        if not format_result.is_valid:
            return CoherenceValidationResult(
                is_valid=False,
                errors=list(format_result.errors),
                message=SKIPPED_MESSAGE,
            )

        errors: list[CoherenceError] = []
        valid_rows: list[ValidatedRow] = []

        for index, row in enumerate(format_result.validated_rows):
            row_errors = self._check_row(row, now=now)
            if row_errors:
                errors.extend(row_errors)
                continue

            key = self._record_key(row, index)
            if key in symbol_table:
                logger.warning(
                    "Duplicate accident id=%r at row=%s overwrites an earlier entry",
                    key,
                    row.row_number,
                )
            symbol_table[key] = dict(row.values)
            valid_rows.append(row)

        return CoherenceValidationResult(
            is_valid=not errors,
            errors=errors,
            valid_rows=valid_rows,
            symbol_table=list(symbol_table.items()),
        )

    def _check_row(self, row: ValidatedRow, *, now: datetime) -> list[CoherenceError]:
        row_errors: list[CoherenceError] = []
        for kind, rule in self._rules.items():
            for name, value in row.fields_of(kind):
                # Absent or empty fields are not flagged.
                if not value:
                    continue
                if not rule.holds(value, now):
                    row_errors.append(
                        CoherenceError(
                            row=row.row_number,
                            field=name,
                            message=rule.message,
                            value=value,
                        )
                    )
        return row_errors

    @staticmethod
    def _record_key(row: ValidatedRow, index: int) -> str:
        accident_id = row.value_of(FieldKind.IDENTIFIER)
        if accident_id:
            return accident_id
        return f"{SYNTHETIC_KEY_PREFIX}{index}"
