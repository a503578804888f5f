"""
accident_analyzer/services/aggregation_service.py

Aggregation layer for accepted accident records.

Every figure is computed over accepted rows only; rejected rows never reach
this module.

Aggregates
----------
severity_counts       : histogram keyed by lower-cased ``gravedad``
vehicle_type_counts   : histogram keyed by raw ``tipo_vehiculo``
                        (empty or missing values bucketed as "No especificado")
alcohol_involved      : rows whose ``alcohol_involucrado`` is si/true/1
speeding_involved     : rows whose ``exceso_velocidad`` is si/true/1
total_casualties      : sum of ``victimas`` parsed as int; parse failures add 0

Casualty parsing is lenient. Format validation has already rejected
non-integer values, so a parse failure here only occurs for a missing column.
"""

from __future__ import annotations

import logging
from typing import Final, Sequence

from accident_analyzer.domain.accident import AccidentAggregates, FieldKind, ValidatedRow

logger = logging.getLogger(__name__)

UNSPECIFIED_VEHICLE_TYPE: Final[str] = "No especificado"
TRUTHY_FLAG_VALUES: Final[frozenset[str]] = frozenset({"si", "true", "1"})


def _is_flag_set(value: str | None) -> bool:
    return (value or "").lower() in TRUTHY_FLAG_VALUES


def _parse_casualties(value: str | None) -> int:
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


class AggregationService:
    """
    Computes counts and totals for the report's detailed data block.
    """

    def aggregate(self, rows: Sequence[ValidatedRow]) -> AccidentAggregates:
        severity_counts: dict[str, int] = {}
        vehicle_type_counts: dict[str, int] = {}
        alcohol_involved = 0
        speeding_involved = 0
        total_casualties = 0

        for row in rows:
            severity = (row.value_of(FieldKind.SEVERITY) or "").lower()
            severity_counts[severity] = severity_counts.get(severity, 0) + 1

            vehicle_type = row.value_of(FieldKind.VEHICLE_TYPE) or UNSPECIFIED_VEHICLE_TYPE
            vehicle_type_counts[vehicle_type] = vehicle_type_counts.get(vehicle_type, 0) + 1

            if _is_flag_set(row.value_of(FieldKind.ALCOHOL_INVOLVED)):
                alcohol_involved += 1
            if _is_flag_set(row.value_of(FieldKind.SPEEDING_INVOLVED)):
                speeding_involved += 1

            total_casualties += _parse_casualties(row.value_of(FieldKind.CASUALTIES))

        logger.debug(
            "Aggregated rows=%d casualties=%d alcohol=%d speeding=%d",
            len(rows),
            total_casualties,
            alcohol_involved,
            speeding_involved,
        )
        return AccidentAggregates(
            severity_counts=severity_counts,
            vehicle_type_counts=vehicle_type_counts,
            alcohol_involved=alcohol_involved,
            speeding_involved=speeding_involved,
            total_casualties=total_casualties,
        )
