"""
accident_analyzer/validators/rules.py

Fixed format and coherence rule tables keyed by field kind.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from accident_analyzer.domain.accident import FieldKind

DATE_FORMAT = "%Y-%m-%d"

ALLOWED_SEVERITIES = frozenset({"leve", "moderado", "grave", "fatal"})
ALLOWED_WEATHER_CONDITIONS = frozenset({"soleado", "nublado", "lluvioso", "nevado", "niebla"})
ALLOWED_ROAD_CONDITIONS = frozenset({"seco", "mojado", "hielo", "nieve", "obra"})

MIN_DRIVER_AGE = 16
MAX_DRIVER_AGE = 100

_FLAG_PATTERN = re.compile(r"(si|no|true|false|1|0)", re.IGNORECASE)


@dataclass(frozen=True)
class FormatRule:
    """
    Full-string pattern a raw value must match.
    """

    pattern: re.Pattern[str]
    message: str

    def matches(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None


@dataclass(frozen=True)
class CoherenceRule:
    """
    Domain predicate evaluated against a well-formed value and the analysis time.
    """

    predicate: Callable[[str, datetime], bool]
    message: str

    def holds(self, value: str, now: datetime) -> bool:
        return self.predicate(value, now)


FORMAT_RULES: dict[FieldKind, FormatRule] = {
    FieldKind.IDENTIFIER: FormatRule(
        pattern=re.compile(r"ACC-[0-9]{4}-[0-9]{6}"),
        message="ID del accidente debe tener formato ACC-YYYY-XXXXXX",
    ),
    FieldKind.DATE: FormatRule(
        pattern=re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}"),
        message="La fecha debe tener formato YYYY-MM-DD",
    ),
    FieldKind.TIME: FormatRule(
        pattern=re.compile(r"[0-9]{2}:[0-9]{2}"),
        message="La hora debe tener formato HH:MM",
    ),
    FieldKind.DRIVER_AGE: FormatRule(
        pattern=re.compile(r"[0-9]{1,3}"),
        message="La edad del conductor debe ser un número entre 1 y 999",
    ),
    FieldKind.CASUALTIES: FormatRule(
        pattern=re.compile(r"[0-9]+"),
        message="El número de víctimas debe ser un numero entero",
    ),
    FieldKind.ALCOHOL_INVOLVED: FormatRule(
        pattern=_FLAG_PATTERN,
        message="Alcohol involucrado debe ser si/no, true/false, o 1/0",
    ),
    FieldKind.SPEEDING_INVOLVED: FormatRule(
        pattern=_FLAG_PATTERN,
        message="Exceso de velocidad debe ser si/no, true/false, o 1/0",
    ),
}


# ---------------------------------------------------------------------------
# Coherence predicates
# ---------------------------------------------------------------------------


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def is_past_or_present_date(value: str, now: datetime) -> bool:
    """
    Calendar-valid date whose UTC midnight is not later than ``now``.
    """

    try:
        parsed = datetime.strptime(value.strip(), DATE_FORMAT)
    except ValueError:
        return False
    return parsed.replace(tzinfo=timezone.utc) <= _as_utc(now)


def is_valid_clock_time(value: str, now: datetime) -> bool:
    parts = value.split(":")
    if len(parts) != 2:
        return False
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return False
    return 0 <= hours < 24 and 0 <= minutes < 60


def is_valid_driver_age(value: str, now: datetime) -> bool:
    try:
        age = int(value)
    except ValueError:
        return False
    return MIN_DRIVER_AGE <= age <= MAX_DRIVER_AGE


def _membership(allowed: frozenset[str]) -> Callable[[str, datetime], bool]:
    def _predicate(value: str, now: datetime) -> bool:
        return value.lower() in allowed

    return _predicate


COHERENCE_RULES: dict[FieldKind, CoherenceRule] = {
    FieldKind.DATE: CoherenceRule(
        predicate=is_past_or_present_date,
        message="La fecha no es válida o es en el futuro",
    ),
    FieldKind.TIME: CoherenceRule(
        predicate=is_valid_clock_time,
        message="La hora no tiene un formato válido",
    ),
    FieldKind.DRIVER_AGE: CoherenceRule(
        predicate=is_valid_driver_age,
        message="La edad del conductor debe estar entre 16 y 100 años",
    ),
    FieldKind.SEVERITY: CoherenceRule(
        predicate=_membership(ALLOWED_SEVERITIES),
        message="La gravedad debe ser: leve, moderado, grave o fatal",
    ),
    FieldKind.WEATHER_CONDITION: CoherenceRule(
        predicate=_membership(ALLOWED_WEATHER_CONDITIONS),
        message="La condición climática no es válida",
    ),
    FieldKind.ROAD_CONDITION: CoherenceRule(
        predicate=_membership(ALLOWED_ROAD_CONDITIONS),
        message="La condición de la vía no es válida",
    ),
}
