# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Core modules for mantajobs.

This package contains:
- config: Client config loading and validation
- schema: Frozen dataclass schema (ClientConfig)
- executor: RequestExecutor protocol and the requests-backed implementation
- stream: Incremental decoder for concatenated JSON responses
- jobs: JobClient with the job lifecycle operations
"""

from .config import load_config
from .executor import ExecutorResponse, HttpRequestExecutor, RequestExecutor, ResponseBody, Signer
from .jobs import JobClient, JobListing, parse_job_location, parse_result_set_size
from .schema import ClientConfig
from .stream import iter_json_values

__all__ = [
    # Config
    "load_config",
    "ClientConfig",
    # Execution
    "ExecutorResponse",
    "HttpRequestExecutor",
    "RequestExecutor",
    "ResponseBody",
    "Signer",
    # Jobs
    "JobClient",
    "JobListing",
    "parse_job_location",
    "parse_result_set_size",
    # Streaming
    "iter_json_values",
]
