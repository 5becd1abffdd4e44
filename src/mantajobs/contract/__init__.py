# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Shared API contract for the jobs API.

This package defines the canonical Pydantic models and enums exchanged with
the compute-job service. It has zero internal imports outside itself, and
only depends on pydantic.

Usage:
    from mantajobs.contract import CreateJobInput, JobPhase, PhaseType
    from mantajobs.contract import ListJobsInput, ListJobsOutput, JobSummary
"""

from mantajobs.contract.enums import JobState, PhaseType
from mantajobs.contract.requests import CreateJobInput, JobPhase, ListJobsInput
from mantajobs.contract.responses import CreateJobOutput, JobSummary, ListJobsOutput

__all__ = [
    "JobState",
    "PhaseType",
    "JobPhase",
    "CreateJobInput",
    "ListJobsInput",
    "CreateJobOutput",
    "JobSummary",
    "ListJobsOutput",
]
