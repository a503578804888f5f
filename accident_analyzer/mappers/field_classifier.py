"""
accident_analyzer/mappers/field_classifier.py

Classifies raw accident columns into field kinds and tokenizes every value.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from accident_analyzer.domain.accident import FieldKind, FieldToken, LexicalResult

FIELD_KIND_BY_NAME: dict[str, FieldKind] = {
    kind.value: kind for kind in FieldKind if kind is not FieldKind.UNKNOWN
}


def normalize_field_name(name: str) -> str:
    """
    Normalize a column name for kind lookup.
    """

    return name.strip().lower()


def classify_field_name(name: str) -> FieldKind:
    """
    Return the field kind for a raw column name, or UNKNOWN.
    """

    return FIELD_KIND_BY_NAME.get(normalize_field_name(name), FieldKind.UNKNOWN)


class FieldClassifier:
    """
    Produces one token per field per row, preserving input order.
    """

    def classify(self, records: Sequence[Mapping[str, Any]]) -> LexicalResult:
        tokens: list[FieldToken] = []
        for row_index, record in enumerate(records, start=1):
            for position, (name, value) in enumerate(record.items(), start=1):
                tokens.append(
                    FieldToken(
                        name=name,
                        kind=classify_field_name(name),
                        value=self._stringify_value(value),
                        row=row_index,
                        position=position,
                    )
                )
        return LexicalResult(tokens=tuple(tokens))

    @staticmethod
    def _stringify_value(value: Any) -> str:
        if value is None:
            return ""
        return str(value)
