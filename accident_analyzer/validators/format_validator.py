"""
accident_analyzer/validators/format_validator.py

Pattern-based format validation of classified accident fields.
"""

from __future__ import annotations

from typing import Mapping

from accident_analyzer.domain.accident import (
    FieldKind,
    FieldToken,
    FormatError,
    FormatValidationResult,
    LexicalResult,
    ValidatedRow,
)
from accident_analyzer.validators.rules import FORMAT_RULES, FormatRule


class FormatValidator:
    """
    Partitions rows into well-formed rows and rows with format errors.

    One malformed field rejects the whole row. Fields without a rule
    (including UNKNOWN ones) are always accepted.
    """

    def __init__(self, *, rules: Mapping[FieldKind, FormatRule] | None = None) -> None:
        self._rules = dict(FORMAT_RULES if rules is None else rules)

    def validate(self, lexical_result: LexicalResult) -> FormatValidationResult:
        errors: list[FormatError] = []
        validated_rows: list[ValidatedRow] = []

        for row_number, row_tokens in self._group_by_row(lexical_result.tokens).items():
            row_errors: list[FormatError] = []
            values: dict[str, str] = {}
            columns: dict[FieldKind, list[str]] = {}

            for token in row_tokens:
                values[token.name] = token.value
                if token.kind is not FieldKind.UNKNOWN:
                    columns.setdefault(token.kind, []).append(token.name)

                rule = self._rules.get(token.kind)
                if rule is not None and not rule.matches(token.value):
                    row_errors.append(
                        FormatError(
                            row=row_number,
                            column=token.name,
                            message=rule.message,
                            value=token.value,
                        )
                    )

            if row_errors:
                errors.extend(row_errors)
            else:
                validated_rows.append(
                    ValidatedRow(row_number=row_number, values=values, columns=columns)
                )

        return FormatValidationResult(
            is_valid=not errors,
            errors=errors,
            validated_rows=validated_rows,
        )

    @staticmethod
    def _group_by_row(tokens: tuple[FieldToken, ...]) -> dict[int, list[FieldToken]]:
        grouped: dict[int, list[FieldToken]] = {}
        for token in tokens:
            grouped.setdefault(token.row, []).append(token)
        return grouped
