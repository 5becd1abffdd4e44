# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Canonical enum definitions for the jobs API contract."""

from enum import Enum


class PhaseType(str, Enum):
    """Kind of a job phase.

    Map phases run `exec` once per input object; reduce phases run it once
    per reducer zone.
    """

    MAP = "map"
    REDUCE = "reduce"


class JobState(str, Enum):
    """Job states reported by the service. Only RUNNING is usable as a list filter."""

    QUEUED = "queued"
    RUNNING = "running"
    DONE = "done"
