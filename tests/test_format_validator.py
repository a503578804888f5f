"""
tests/test_format_validator.py

Pure unit tests for pattern-based format validation.
"""

from __future__ import annotations

import pytest

from accident_analyzer.domain.accident import FieldKind
from accident_analyzer.mappers.field_classifier import FieldClassifier
from accident_analyzer.validators.format_validator import FormatValidator
from tests.factories import make_row


def _validate(records):
    return FormatValidator().validate(FieldClassifier().classify(records))


class TestFormatPartition:
    def test_well_formed_row_is_validated(self) -> None:
        result = _validate([make_row()])

        assert result.is_valid is True
        assert result.errors == []
        assert len(result.validated_rows) == 1
        assert result.validated_rows[0].values == make_row()
        assert result.validated_rows[0].row_number == 1

    def test_bad_identifier_rejects_row(self) -> None:
        result = _validate([make_row(id="BAD-ID")])

        assert result.is_valid is False
        assert result.validated_rows == []
        assert len(result.errors) == 1
        error = result.errors[0]
        assert (error.row, error.column, error.value) == (1, "id", "BAD-ID")
        assert "ACC-YYYY-XXXXXX" in error.message

    def test_all_violations_of_a_row_are_reported(self) -> None:
        result = _validate([make_row(fecha="01/05/2023", hora="2:30", victimas="dos")])

        assert {error.column for error in result.errors} == {"fecha", "hora", "victimas"}
        assert all(error.row == 1 for error in result.errors)

    def test_rows_are_judged_independently(self) -> None:
        result = _validate([make_row(), make_row(edad_conductor="1000"), make_row(id="ACC-2024-000003")])

        assert [row.row_number for row in result.validated_rows] == [1, 3]
        assert [error.row for error in result.errors] == [2]

    def test_unruled_and_unknown_fields_are_free_text(self) -> None:
        result = _validate(
            [make_row(gravedad="catastrofico", ubicacion="", tipo_vehiculo="???", notas="cualquier cosa")]
        )

        assert result.is_valid is True

    def test_columns_are_resolved_by_kind(self) -> None:
        result = _validate([{"ID": "ACC-2024-000001", " Gravedad": "grave"}])

        row = result.validated_rows[0]
        assert row.value_of(FieldKind.IDENTIFIER) == "ACC-2024-000001"
        assert row.value_of(FieldKind.SEVERITY) == "grave"
        assert row.value_of(FieldKind.DATE) is None

    def test_duplicate_kind_columns_are_all_kept(self) -> None:
        record = make_row()
        record["Gravedad"] = "grave"

        row = _validate([record]).validated_rows[0]

        assert row.columns[FieldKind.SEVERITY] == ["gravedad", "Gravedad"]
        assert row.value_of(FieldKind.SEVERITY) == "leve"
        assert row.fields_of(FieldKind.SEVERITY) == [("gravedad", "leve"), ("Gravedad", "grave")]


class TestFormatRules:
    @pytest.mark.parametrize("value", ["SI", "No", "true", "FALSE", "1", "0"])
    def test_flags_accept_case_insensitive_values(self, value: str) -> None:
        assert _validate([make_row(alcohol_involucrado=value, exceso_velocidad=value)]).is_valid

    @pytest.mark.parametrize("value", ["yes", "2", "", "si "])
    def test_flags_reject_other_values(self, value: str) -> None:
        assert not _validate([make_row(exceso_velocidad=value)]).is_valid

    @pytest.mark.parametrize(
        "field, value",
        [
            ("id", "acc-2024-000001"),
            ("id", "ACC-24-000001"),
            ("fecha", "2023-5-01"),
            ("hora", "14:30:00"),
            ("edad_conductor", ""),
            ("victimas", "-1"),
            ("victimas", "٣"),
            ("fecha", "2023-05-01\n"),
        ],
    )
    def test_malformed_values(self, field: str, value: str) -> None:
        assert not _validate([make_row(**{field: value})]).is_valid

    def test_pattern_matches_shape_not_meaning(self) -> None:
        result = _validate([make_row(fecha="2099-13-45", hora="25:61")])

        assert result.is_valid is True
