"""
accident_analyzer/domain/accident.py

Domain models shared by the accident validation pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """
    Closed set of recognized accident columns.

    Values are the canonical (normalized) field names.
    """

    IDENTIFIER = "id"
    DATE = "fecha"
    TIME = "hora"
    LOCATION = "ubicacion"
    VEHICLE_TYPE = "tipo_vehiculo"
    SEVERITY = "gravedad"
    CASUALTIES = "victimas"
    WEATHER_CONDITION = "condicion_climatica"
    ROAD_CONDITION = "condicion_via"
    DRIVER_AGE = "edad_conductor"
    ALCOHOL_INVOLVED = "alcohol_involucrado"
    SPEEDING_INVOLVED = "exceso_velocidad"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class FieldToken:
    """
    One classified field value with its position in the input.
    """

    name: str
    kind: FieldKind
    value: str
    row: int
    position: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.kind.value,
            "value": self.value,
            "row": self.row,
            "position": self.position,
        }


@dataclass(frozen=True)
class LexicalResult:
    """
    Flat token sequence across all rows, in row then column order.
    """

    tokens: tuple[FieldToken, ...]


@dataclass(frozen=True)
class FormatError:
    """
    One field whose raw value does not match its kind's pattern.
    """

    row: int
    column: str
    message: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "column": self.column,
            "message": self.message,
            "value": self.value,
        }


@dataclass(frozen=True)
class CoherenceError:
    """
    One well-formed field that fails a domain predicate.
    """

    row: int
    field: str
    message: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "field": self.field,
            "message": self.message,
            "value": self.value,
        }


@dataclass(frozen=True)
class ValidatedRow:
    """
    A row whose ruled fields all passed format validation.

    ``columns`` maps each recognized kind to every field name carrying it, in
    column order, so later stages can look values up regardless of header
    casing. Aggregation reads the first column of a kind; coherence checks
    all of them.
    """

    row_number: int
    values: dict[str, str]
    columns: dict[FieldKind, list[str]] = field(default_factory=dict)

    def value_of(self, kind: FieldKind) -> str | None:
        names = self.columns.get(kind)
        if not names:
            return None
        return self.values.get(names[0])

    def fields_of(self, kind: FieldKind) -> list[tuple[str, str]]:
        return [(name, self.values.get(name, "")) for name in self.columns.get(kind, [])]


@dataclass(frozen=True)
class FormatValidationResult:
    is_valid: bool
    errors: list[FormatError] = field(default_factory=list)
    validated_rows: list[ValidatedRow] = field(default_factory=list)


@dataclass(frozen=True)
class CoherenceValidationResult:
    """
    Outcome of the coherence stage.

    When the format stage failed, ``errors`` carries the format errors forward
    unchanged and ``message`` explains why no predicate was evaluated.
    """

    is_valid: bool
    errors: list[FormatError | CoherenceError] = field(default_factory=list)
    valid_rows: list[ValidatedRow] = field(default_factory=list)
    symbol_table: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    message: str | None = None


@dataclass(frozen=True)
class AccidentAggregates:
    """
    Raw numeric aggregates over accepted records.
    """

    severity_counts: dict[str, int]
    vehicle_type_counts: dict[str, int]
    alcohol_involved: int
    speeding_involved: int
    total_casualties: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "severityCounts": dict(self.severity_counts),
            "vehicleTypeCounts": dict(self.vehicle_type_counts),
            "alcoholInvolved": self.alcohol_involved,
            "speedingInvolved": self.speeding_involved,
            "totalCasualties": self.total_casualties,
        }
