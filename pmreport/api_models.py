"""Pydantic request/response models for the pmreport HTTP API.

Report bodies are deeply nested and tolerant by design, so the request models
only type the identification fields used for file naming and accept every
other key as-is; :meth:`MaintenanceReportData.from_dict` does the rest.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class MaintenanceReportRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    cinemaName: str | None = None
    date: str | None = None
    serviceVisit: str | int | None = None
    recommendedParts: list[dict[str, Any]] | None = None


class ServiceRecordRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    cinemaName: str | None = None
    date: str | None = None
    site: dict[str, Any] | None = None
    projector: dict[str, Any] | None = None
    workDetails: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: str
    version: str
