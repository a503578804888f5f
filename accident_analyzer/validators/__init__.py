"""
accident_analyzer/validators package marker.
"""

from accident_analyzer.validators.coherence_validator import CoherenceValidator
from accident_analyzer.validators.format_validator import FormatValidator
from accident_analyzer.validators.rules import COHERENCE_RULES, FORMAT_RULES, CoherenceRule, FormatRule

__all__ = [
    "COHERENCE_RULES",
    "CoherenceRule",
    "CoherenceValidator",
    "FORMAT_RULES",
    "FormatRule",
    "FormatValidator",
]
