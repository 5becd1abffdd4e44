# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Request payload models for the jobs API contract."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mantajobs.contract.enums import JobState, PhaseType


class JobPhase(BaseModel):
    """Specification of one map or reduce phase.

    Numeric sizing fields treat 0 as unset so the service picks its default.
    Values are forwarded as-is; the service rejects sizes outside its allowed
    sets (memory: 256..8192 MB, disk: 2..1024 GB, powers of two).
    """

    model_config = ConfigDict(populate_by_name=True)

    kind: PhaseType | None = Field(None, alias="type", description="map or reduce; service default when unset")
    assets: list[str] | None = Field(None, description="Objects placed in the compute zone")
    exec: str = Field(..., description="Shell statement run per input (map) or per reducer (reduce)")
    init: str | None = Field(None, description="Shell statement run once per zone before any exec")
    reducer_count: int | None = Field(None, alias="count", ge=0, description="Number of reducers (default 1, max 1024)")
    memory_mb: int | None = Field(None, alias="memory", ge=0, description="DRAM in MB for the compute zone")
    disk_gb: int | None = Field(None, alias="disk", ge=0, description="Disk in GB for the compute zone")

    @field_validator("reducer_count", "memory_mb", "disk_gb")
    @classmethod
    def _zero_is_unset(cls, value: int | None) -> int | None:
        return value or None

    @field_validator("assets", "init")
    @classmethod
    def _empty_is_unset(cls, value):
        return value or None


class CreateJobInput(BaseModel):
    """Payload for POST /{account}/jobs."""

    name: str = Field(..., description="Human-readable job name")
    phases: list[JobPhase] = Field(default_factory=list, description="Phases in pipeline order")

    def to_payload(self) -> dict[str, Any]:
        """Wire representation with unset optional phase fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ListJobsInput(BaseModel):
    """Filters for GET /{account}/jobs. Default values are not sent."""

    running_only: bool = False
    limit: int = Field(0, ge=0, description="Page size; 0 lets the service decide")
    marker: str = Field("", description="Opaque continuation cursor (manta_path)")

    def to_query(self) -> dict[str, str]:
        query: dict[str, str] = {}
        if self.running_only:
            query["state"] = JobState.RUNNING.value
        if self.limit:
            query["limit"] = str(self.limit)
        if self.marker:
            query["manta_path"] = self.marker
        return query
