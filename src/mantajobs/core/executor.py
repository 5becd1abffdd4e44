# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Request execution for the jobs API.

JobClient never talks HTTP directly; it hands method, path, query, headers and
a body to a RequestExecutor and gets back a response body stream plus headers.
HttpRequestExecutor is the default implementation on top of requests.

Signing is pluggable: a Signer turns the request Date header into an
Authorization header value. No key-based signer ships with this package.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from email.utils import formatdate
from typing import IO, Any, Protocol

import requests
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from mantajobs import __version__
from mantajobs.core.schema import ClientConfig
from mantajobs.errors import RequestError

logger = logging.getLogger(__name__)


class ResponseBody(Protocol):
    """Binary response stream. Callers must close() it exactly once."""

    def read(self, size: int = -1) -> bytes: ...

    def close(self) -> None: ...


class Signer(Protocol):
    """Produces the Authorization header value for a request."""

    def sign(self, date: str) -> str: ...


@dataclass(frozen=True)
class ExecutorResponse:
    """Successful response: an open body stream and case-insensitive headers."""

    body: ResponseBody
    headers: Mapping[str, str]


class RequestExecutor(Protocol):
    """Performs one request against the service.

    Implementations raise RequestError on transport failures and non-success
    statuses, after releasing any response they acquired.
    """

    def execute(
        self,
        method: str,
        path: str,
        query: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        json_body: Any = None,
    ) -> ExecutorResponse: ...

    def execute_raw(
        self,
        method: str,
        path: str,
        query: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        body: bytes | IO[bytes] | None = None,
    ) -> ExecutorResponse: ...


class _StreamedBody:
    """ResponseBody over a streamed requests.Response."""

    def __init__(self, response: requests.Response):
        self._response = response
        # Let urllib3 undo any Content-Encoding while we read raw
        self._response.raw.decode_content = True

    def read(self, size: int = -1) -> bytes:
        try:
            return self._response.raw.read(None if size < 0 else size)
        except (Urllib3HTTPError, OSError) as e:
            raise RequestError(f"error reading response body: {e}") from e

    def close(self) -> None:
        self._response.close()


def _error_from_response(response: requests.Response) -> RequestError:
    """Build a RequestError from a non-success response.

    The service reports failures as {"code": "...", "message": "..."}; fall
    back to the HTTP reason when the body is anything else.
    """
    code = None
    message = f"HTTP {response.status_code} {response.reason or ''}".strip()
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        code = payload.get("code")
        if payload.get("message"):
            message = f"HTTP {response.status_code}: {payload['message']}"
    return RequestError(message, status_code=response.status_code, code=code)


@dataclass(frozen=True)
class HttpRequestExecutor:
    """RequestExecutor backed by requests.

    Usage:
        executor = HttpRequestExecutor.from_config(config)
        response = executor.execute("GET", "/alice/jobs", query={"limit": "10"})
    """

    config: ClientConfig
    signers: tuple[Signer, ...] = field(default=())

    @classmethod
    def from_config(cls, config: ClientConfig, signers: Sequence[Signer] = ()) -> "HttpRequestExecutor":
        return cls(config=config, signers=tuple(signers))

    def _headers(self, extra: Mapping[str, str] | None) -> dict[str, str]:
        date = formatdate(usegmt=True)
        headers = {
            "Date": date,
            "Accept": "application/json",
            "User-Agent": f"mantajobs/{__version__}",
        }
        if self.signers:
            headers["Authorization"] = self.signers[0].sign(date)
        if extra:
            headers.update(extra)
        return headers

    def _send(self, method: str, path: str, query, headers, **body_kwargs) -> ExecutorResponse:
        url = f"{self.config.base_url}{path}"
        logger.debug("%s %s query=%s", method, url, dict(query or {}))

        try:
            response = requests.request(
                method,
                url,
                params=dict(query) if query else None,
                headers=self._headers(headers),
                timeout=self.config.timeout,
                stream=True,
                **body_kwargs,
            )
        except requests.exceptions.RequestException as e:
            raise RequestError(f"{method} {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            try:
                error = _error_from_response(response)
            finally:
                response.close()
            logger.debug("%s %s -> %s", method, path, error)
            raise error

        return ExecutorResponse(body=_StreamedBody(response), headers=response.headers)

    def execute(self, method, path, query=None, headers=None, json_body=None) -> ExecutorResponse:
        if json_body is None:
            return self._send(method, path, query, headers)
        return self._send(method, path, query, headers, json=json_body)

    def execute_raw(self, method, path, query=None, headers=None, body=None) -> ExecutorResponse:
        return self._send(method, path, query, headers, data=body)
