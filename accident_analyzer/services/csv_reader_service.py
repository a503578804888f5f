"""
accident_analyzer/services/csv_reader_service.py

Decodes an uploaded CSV stream into raw accident records.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Any, BinaryIO, Mapping

logger = logging.getLogger(__name__)


class CSVHeaderValidationError(ValueError):
    """
    Raised when CSV shape/header validation fails.
    """


class AccidentCSVReader:
    """
    Reads header-keyed rows, skipping completely empty lines.

    Rows with more or fewer cells than the header are rejected, since the
    record shape is undefined for them.
    """

    def __init__(self, *, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def read_records(self, raw_file: BinaryIO) -> list[dict[str, str]]:
        raw_file.seek(0)
        text_stream: io.TextIOWrapper | None = None
        records: list[dict[str, str]] = []

        try:
            text_stream = io.TextIOWrapper(raw_file, encoding=self._encoding, newline="")
            reader = csv.DictReader(text_stream)
            headers = reader.fieldnames or []
            if not [header for header in headers if header and header.strip()]:
                raise CSVHeaderValidationError("CSV header row is missing.")

            for raw_row in reader:
                if self.is_completely_empty_row(raw_row):
                    continue
                if None in raw_row:
                    raise CSVHeaderValidationError(
                        f"Row {reader.line_num} has more fields than the header."
                    )
                if any(value is None for value in raw_row.values()):
                    raise CSVHeaderValidationError(
                        f"Row {reader.line_num} has fewer fields than the header."
                    )
                records.append(dict(raw_row))

        except UnicodeDecodeError as exc:
            raise CSVHeaderValidationError(f"CSV must be {self._encoding} encoded.") from exc
        except csv.Error as exc:
            raise CSVHeaderValidationError(f"Invalid CSV format: {exc}") from exc
        finally:
            if text_stream is not None:
                try:
                    text_stream.detach()
                except ValueError:
                    pass

        logger.info("Decoded CSV rows=%d columns=%d", len(records), len(headers))
        return records

    @staticmethod
    def is_completely_empty_row(row: Mapping[Any, Any]) -> bool:
        """
        Return True when all values in the row are empty or whitespace.
        """

        for value in row.values():
            if value is None:
                continue
            if isinstance(value, list):
                if any(str(item).strip() for item in value):
                    return False
                continue
            if str(value).strip():
                return False
        return True
