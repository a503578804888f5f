"""
accident_analyzer/schemas package marker.
"""

from accident_analyzer.schemas.accident_analysis import AccidentRecordsRequest, HealthResponse

__all__ = [
    "AccidentRecordsRequest",
    "HealthResponse",
]
