# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Exception hierarchy for mantajobs.

MantaError
    RequestError            executor-level transport or HTTP failure
    StreamDecodeError       malformed or truncated concatenated-JSON stream
    JobOperationError       a job operation failed; the wrapped error is __cause__
        JobRequestError
        JobDecodeError
        MalformedLocationError
"""


class MantaError(Exception):
    """Base class for all mantajobs errors."""


class RequestError(MantaError):
    """A request could not be completed.

    Args:
        message: Human-readable description
        status_code: HTTP status, or None for network-level failures
        code: Service error code from the response body (e.g. "ResourceNotFound")
    """

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class StreamDecodeError(MantaError):
    """The response stream did not contain well-formed JSON values."""


class JobOperationError(MantaError):
    """A job operation failed. The underlying error is chained as __cause__."""

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation


class JobRequestError(JobOperationError):
    """The request for a job operation failed."""

    @property
    def status_code(self) -> int | None:
        cause = self.__cause__
        return cause.status_code if isinstance(cause, RequestError) else None

    @property
    def code(self) -> str | None:
        cause = self.__cause__
        return cause.code if isinstance(cause, RequestError) else None


class JobDecodeError(JobOperationError):
    """The response of a job operation could not be decoded."""


class MalformedLocationError(JobOperationError):
    """A create response carried no usable job location."""
