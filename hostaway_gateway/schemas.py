"""Pydantic schemas for API responses."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel


class AvailabilityResponse(BaseModel):
    """Unavailable calendar dates for a dwelling."""

    unavailable: List[str]


class ErrorResponse(BaseModel):
    """Error body returned to callers."""

    error: str
