"""
accident_analyzer/services package marker.
"""

from accident_analyzer.services.accident_analysis_service import (
    AccidentAnalysisService,
    get_accident_analysis_service,
)
from accident_analyzer.services.accident_parser import AccidentParser, AnalysisInputError, serialize_report
from accident_analyzer.services.aggregation_service import AggregationService
from accident_analyzer.services.csv_reader_service import AccidentCSVReader, CSVHeaderValidationError

__all__ = [
    "AccidentAnalysisService",
    "AccidentCSVReader",
    "AccidentParser",
    "AggregationService",
    "AnalysisInputError",
    "CSVHeaderValidationError",
    "get_accident_analysis_service",
    "serialize_report",
]
