"""
accident_analyzer/schemas/accident_analysis.py

Request schemas for accident analysis endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AccidentRecordsRequest(BaseModel):
    """
    API request model carrying already-decoded accident rows.
    """

    model_config = ConfigDict(extra="forbid")

    records: list[dict[str, str | None]] = Field(...)


class HealthResponse(BaseModel):
    status: str
