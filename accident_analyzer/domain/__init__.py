"""
accident_analyzer/domain package marker.
"""

from accident_analyzer.domain.accident import (
    AccidentAggregates,
    CoherenceError,
    CoherenceValidationResult,
    FieldKind,
    FieldToken,
    FormatError,
    FormatValidationResult,
    LexicalResult,
    ValidatedRow,
)

__all__ = [
    "AccidentAggregates",
    "CoherenceError",
    "CoherenceValidationResult",
    "FieldKind",
    "FieldToken",
    "FormatError",
    "FormatValidationResult",
    "LexicalResult",
    "ValidatedRow",
]
