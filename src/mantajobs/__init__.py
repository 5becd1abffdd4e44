"""
mantajobs - Client for a remote map/reduce compute-job service.

This package submits multi-phase jobs, streams object-path inputs to them,
closes their input, requests cancellation and lists submitted jobs.

Key modules:
- contract: Pydantic wire models (JobPhase, CreateJobInput, JobSummary, ...)
- core.config: Client config loading and validation
- core.executor: Request execution (RequestExecutor, HttpRequestExecutor)
- core.jobs: JobClient lifecycle operations
- core.stream: Streaming decoder for list responses
- errors: Exception hierarchy
- logging_utils: Logging configuration

Usage:
    from mantajobs import JobClient, load_config
    client = JobClient.from_config(load_config())
    page = client.list_jobs()
"""

__version__ = "0.1.0"

# Logging utilities (should be first)
from .logging_utils import setup_logging

# Contract
from .contract import (
    CreateJobInput,
    CreateJobOutput,
    JobPhase,
    JobState,
    JobSummary,
    ListJobsInput,
    ListJobsOutput,
    PhaseType,
)

# Core modules
from .core.config import load_config
from .core.executor import HttpRequestExecutor, RequestExecutor, Signer
from .core.jobs import JobClient, JobListing
from .core.schema import ClientConfig
from .errors import (
    JobDecodeError,
    JobOperationError,
    JobRequestError,
    MalformedLocationError,
    MantaError,
    RequestError,
    StreamDecodeError,
)

__all__ = [
    # Version
    "__version__",
    # Logging
    "setup_logging",
    # Config
    "load_config",
    "ClientConfig",
    # Contract
    "CreateJobInput",
    "CreateJobOutput",
    "JobPhase",
    "JobState",
    "JobSummary",
    "ListJobsInput",
    "ListJobsOutput",
    "PhaseType",
    # Execution
    "HttpRequestExecutor",
    "RequestExecutor",
    "Signer",
    # Jobs
    "JobClient",
    "JobListing",
    # Errors
    "MantaError",
    "RequestError",
    "StreamDecodeError",
    "JobOperationError",
    "JobRequestError",
    "JobDecodeError",
    "MalformedLocationError",
]
