# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Response models for the jobs API contract."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateJobOutput(BaseModel):
    """Result of a create operation."""

    job_id: str


class JobSummary(BaseModel):
    """One record of a job listing.

    The service emits `{"name": <job id>, "mtime": <ISO 8601>, ...}`; extra
    fields such as `type` are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    job_id: str = Field(..., alias="name")
    modified_time: datetime = Field(..., alias="mtime")


class ListJobsOutput(BaseModel):
    """One page of a job listing.

    `result_set_size` is the total number of jobs matching the filter across
    all pages, or 0 when the service did not report it.
    """

    jobs: list[JobSummary]
    result_set_size: int = 0
