"""Pydantic schemas for analytics endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class VisitCountsResponse(BaseModel):
    """Visit counters after recording a visit."""

    total: int = Field(description="All visits ever recorded")
    today: int = Field(description="Visits since local midnight")
    month: int = Field(description="Visits since the first of the local month")


class ChartResponse(BaseModel):
    """Parallel label/value arrays for a chart."""

    labels: list[str]
    values: list[int]
