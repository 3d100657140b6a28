"""Pydantic models for request/response payloads."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

CATALOG_FIELDS = ("flowername", "habitat", "binomialName", "classification", "flowername_kr")


class FlowerRecord(BaseModel):
    flowername: str | None = None
    habitat: str | None = None
    binomialName: str | None = None
    classification: str | None = None
    flowername_kr: str | None = None


class ShoppingResponse(BaseModel):
    items: list[dict[str, Any]] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
