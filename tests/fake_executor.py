# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
In-memory RequestExecutor for unit tests.

Records every call and hands out bodies that count close() calls, so tests
can assert that each response body is released exactly once.
"""

import io
from dataclasses import dataclass, field
from typing import Any

from requests.structures import CaseInsensitiveDict

from mantajobs.core.executor import ExecutorResponse
from mantajobs.errors import RequestError


class TrackingBody(io.BytesIO):
    """Response body that counts close() calls."""

    def __init__(self, data: bytes = b"", read_error: RequestError | None = None):
        super().__init__(data)
        self.close_count = 0
        self.read_error = read_error

    def read(self, size=-1) -> bytes:
        chunk = super().read(size)
        if not chunk and self.read_error is not None:
            raise self.read_error
        return chunk

    def close(self) -> None:
        self.close_count += 1
        super().close()


@dataclass
class RecordedCall:
    method: str
    path: str
    query: dict[str, str]
    headers: dict[str, str]
    json_body: Any = None
    raw_body: bytes | None = None


@dataclass
class FakeExecutor:
    """Returns a canned response (or raises a canned error) for every call."""

    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    error: RequestError | None = None
    read_error: RequestError | None = None
    calls: list[RecordedCall] = field(default_factory=list)
    bodies: list[TrackingBody] = field(default_factory=list)

    def _respond(self, call: RecordedCall) -> ExecutorResponse:
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        body = TrackingBody(self.body, read_error=self.read_error)
        self.bodies.append(body)
        return ExecutorResponse(body=body, headers=CaseInsensitiveDict(self.headers))

    def execute(self, method, path, query=None, headers=None, json_body=None):
        return self._respond(RecordedCall(method, path, dict(query or {}), dict(headers or {}), json_body=json_body))

    def execute_raw(self, method, path, query=None, headers=None, body=None):
        raw = body.read() if hasattr(body, "read") else body
        return self._respond(RecordedCall(method, path, dict(query or {}), dict(headers or {}), raw_body=raw))

    @property
    def last_call(self) -> RecordedCall:
        return self.calls[-1]
