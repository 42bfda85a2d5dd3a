"""Pydantic models for the REST server."""

from __future__ import annotations

from pydantic import BaseModel


class DecodeRequest(BaseModel):
    encoded: str


class HealthResponse(BaseModel):
    status: str = "ok"
    environment: str
