"""
tests/test_aggregation_service.py

Pytest unit tests for AggregationService.

Coverage
--------
- Severity histogram (lower-cased keys)
- Vehicle type histogram with "No especificado" bucket
- Alcohol / speeding flag counting
- Lenient casualty sum
- Empty input
"""

from __future__ import annotations

import pytest

from accident_analyzer.domain.accident import FieldKind, ValidatedRow
from accident_analyzer.services.aggregation_service import UNSPECIFIED_VEHICLE_TYPE, AggregationService


def _row(**values: str) -> ValidatedRow:
    columns = {FieldKind(name): [name] for name in values}
    return ValidatedRow(row_number=1, values=dict(values), columns=columns)


@pytest.fixture()
def svc() -> AggregationService:
    return AggregationService()


class TestHistograms:
    def test_severity_keys_are_lower_cased(self, svc: AggregationService) -> None:
        result = svc.aggregate([_row(gravedad="Leve"), _row(gravedad="LEVE"), _row(gravedad="grave")])

        assert result.severity_counts == {"leve": 2, "grave": 1}

    def test_severity_counts_sum_to_row_count(self, svc: AggregationService) -> None:
        rows = [_row(gravedad="fatal"), _row(), _row(gravedad="moderado")]

        result = svc.aggregate(rows)

        assert sum(result.severity_counts.values()) == len(rows)
        assert result.severity_counts[""] == 1

    def test_vehicle_types_keep_raw_values(self, svc: AggregationService) -> None:
        result = svc.aggregate(
            [_row(tipo_vehiculo="Moto"), _row(tipo_vehiculo="moto"), _row(tipo_vehiculo=""), _row()]
        )

        assert result.vehicle_type_counts == {"Moto": 1, "moto": 1, UNSPECIFIED_VEHICLE_TYPE: 2}


class TestFlagsAndTotals:
    def test_flag_counts(self, svc: AggregationService) -> None:
        rows = [
            _row(alcohol_involucrado="SI", exceso_velocidad="false"),
            _row(alcohol_involucrado="1", exceso_velocidad="True"),
            _row(alcohol_involucrado="no", exceso_velocidad="0"),
        ]

        result = svc.aggregate(rows)

        assert result.alcohol_involved == 2
        assert result.speeding_involved == 1

    def test_casualties_sum_with_lenient_parsing(self, svc: AggregationService) -> None:
        rows = [_row(victimas="3"), _row(victimas="007"), _row(victimas="n/a"), _row()]

        assert svc.aggregate(rows).total_casualties == 10

    def test_empty_input(self, svc: AggregationService) -> None:
        result = svc.aggregate([])

        assert result.to_dict() == {
            "severityCounts": {},
            "vehicleTypeCounts": {},
            "alcoholInvolved": 0,
            "speedingInvolved": 0,
            "totalCasualties": 0,
        }
