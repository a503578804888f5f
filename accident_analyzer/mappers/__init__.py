"""
accident_analyzer/mappers package marker.
"""

from accident_analyzer.mappers.field_classifier import (
    FieldClassifier,
    classify_field_name,
    normalize_field_name,
)

__all__ = [
    "FieldClassifier",
    "classify_field_name",
    "normalize_field_name",
]
