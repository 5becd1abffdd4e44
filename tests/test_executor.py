# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for the requests-backed request executor."""

import io
from unittest.mock import MagicMock, patch

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from urllib3.exceptions import ProtocolError

from mantajobs import __version__
from mantajobs.core.executor import HttpRequestExecutor
from mantajobs.core.schema import ClientConfig
from mantajobs.errors import RequestError


class RawStream(io.BytesIO):
    """Stand-in for urllib3.HTTPResponse used as Response.raw."""


class StaticSigner:
    """Signer that records the Date it was asked to sign."""

    def __init__(self):
        self.signed: list[str] = []

    def sign(self, date: str) -> str:
        self.signed.append(date)
        return f'Signature keyId="/alice/keys/test",signature="{len(self.signed)}"'


def make_response(status_code=200, body=b"", headers=None, json_data=None, reason="OK"):
    response = MagicMock(status_code=status_code, reason=reason)
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = RawStream(body)
    if json_data is None:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def config():
    return ClientConfig(endpoint="https://manta.example.com/", account="alice", timeout=12.5)


class TestHttpRequestExecutorRequests:
    """Test request construction."""

    @patch("mantajobs.core.executor.requests.request")
    def test_execute_sends_json_body(self, mock_request, config):
        mock_request.return_value = make_response(201, headers={"Location": "/alice/jobs/j1"})
        executor = HttpRequestExecutor.from_config(config)

        response = executor.execute("POST", "/alice/jobs", json_body={"name": "x", "phases": []})

        args, kwargs = mock_request.call_args
        assert args == ("POST", "https://manta.example.com/alice/jobs")
        assert kwargs["json"] == {"name": "x", "phases": []}
        assert "data" not in kwargs
        assert kwargs["timeout"] == 12.5
        assert kwargs["stream"] is True
        assert response.headers["location"] == "/alice/jobs/j1"

    @patch("mantajobs.core.executor.requests.request")
    def test_execute_raw_sends_bytes_unmodified(self, mock_request, config):
        mock_request.return_value = make_response(204)
        executor = HttpRequestExecutor.from_config(config)

        executor.execute_raw("POST", "/alice/jobs/j1/live/in", headers={"Content-Type": "text/plain"}, body=b"/a\n/b")

        _, kwargs = mock_request.call_args
        assert kwargs["data"] == b"/a\n/b"
        assert "json" not in kwargs
        assert kwargs["headers"]["Content-Type"] == "text/plain"

    @patch("mantajobs.core.executor.requests.request")
    def test_query_parameters_passed_through(self, mock_request, config):
        mock_request.return_value = make_response(200)
        executor = HttpRequestExecutor.from_config(config)

        executor.execute("GET", "/alice/jobs", query={"limit": "5"})

        assert mock_request.call_args[1]["params"] == {"limit": "5"}

    @patch("mantajobs.core.executor.requests.request")
    def test_empty_query_sends_no_params(self, mock_request, config):
        mock_request.return_value = make_response(200)
        executor = HttpRequestExecutor.from_config(config)

        executor.execute("GET", "/alice/jobs", query={})

        assert mock_request.call_args[1]["params"] is None

    @patch("mantajobs.core.executor.requests.request")
    def test_default_headers(self, mock_request, config):
        mock_request.return_value = make_response(200)
        executor = HttpRequestExecutor.from_config(config)

        executor.execute("GET", "/alice/jobs")

        headers = mock_request.call_args[1]["headers"]
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"] == f"mantajobs/{__version__}"
        assert headers["Date"].endswith("GMT")
        assert "Authorization" not in headers

    @patch("mantajobs.core.executor.requests.request")
    def test_first_signer_signs_date_header(self, mock_request, config):
        mock_request.return_value = make_response(200)
        signer, unused = StaticSigner(), StaticSigner()
        executor = HttpRequestExecutor.from_config(config, signers=[signer, unused])

        executor.execute("GET", "/alice/jobs")

        headers = mock_request.call_args[1]["headers"]
        assert signer.signed == [headers["Date"]]
        assert headers["Authorization"].startswith("Signature ")
        assert unused.signed == []


class TestHttpRequestExecutorResponses:
    """Test response handling."""

    @patch("mantajobs.core.executor.requests.request")
    def test_body_streams_and_closes_response(self, mock_request, config):
        raw = make_response(200, body=b'{"name":"a"}')
        mock_request.return_value = raw
        executor = HttpRequestExecutor.from_config(config)

        response = executor.execute("GET", "/alice/jobs")

        assert response.body.read(4) == b'{"na'
        assert response.body.read() == b'me":"a"}'
        raw.close.assert_not_called()
        response.body.close()
        raw.close.assert_called_once()

    @patch("mantajobs.core.executor.requests.request")
    def test_http_error_uses_service_error_body(self, mock_request, config):
        raw = make_response(
            404,
            json_data={"code": "ResourceNotFound", "message": "/alice/jobs/nope was not found"},
            reason="Not Found",
        )
        mock_request.return_value = raw
        executor = HttpRequestExecutor.from_config(config)

        with pytest.raises(RequestError) as exc_info:
            executor.execute_raw("POST", "/alice/jobs/nope/live/in/end")

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "ResourceNotFound"
        assert "was not found" in str(exc_info.value)
        raw.close.assert_called_once()

    @patch("mantajobs.core.executor.requests.request")
    def test_http_error_without_json_body(self, mock_request, config):
        raw = make_response(502, reason="Bad Gateway")
        mock_request.return_value = raw
        executor = HttpRequestExecutor.from_config(config)

        with pytest.raises(RequestError) as exc_info:
            executor.execute("GET", "/alice/jobs")

        assert exc_info.value.status_code == 502
        assert exc_info.value.code is None
        assert str(exc_info.value) == "HTTP 502 Bad Gateway"
        raw.close.assert_called_once()

    @patch("mantajobs.core.executor.requests.request")
    def test_network_error_becomes_request_error(self, mock_request, config):
        mock_request.side_effect = requests.exceptions.ConnectionError("Network error")
        executor = HttpRequestExecutor.from_config(config)

        with pytest.raises(RequestError) as exc_info:
            executor.execute("GET", "/alice/jobs")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    @patch("mantajobs.core.executor.requests.request")
    def test_body_read_failure_becomes_request_error(self, mock_request, config):
        raw = make_response(200)
        raw.raw = MagicMock()
        raw.raw.read.side_effect = ProtocolError("Connection broken")
        mock_request.return_value = raw
        executor = HttpRequestExecutor.from_config(config)

        response = executor.execute("GET", "/alice/jobs")

        with pytest.raises(RequestError, match="error reading response body"):
            response.body.read(1024)

    def test_executor_is_immutable(self, config):
        executor = HttpRequestExecutor.from_config(config)

        with pytest.raises(AttributeError):
            executor.config = config
