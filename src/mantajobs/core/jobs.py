# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Job lifecycle operations.

A job goes through:

    create_job -> add_job_inputs (0..n) -> end_job_input -> [cancel_job]

and list_jobs / iter_jobs enumerate previously submitted jobs one page at a
time. The client keeps no per-job state; callers hold on to the job ID.

Usage:
    client = JobClient.from_config(load_config())
    job = client.create_job(CreateJobInput(name="wc", phases=[JobPhase(exec="wc")]))
    client.add_job_inputs(job.job_id, ["/alice/stor/books/dracula.txt"])
    client.end_job_input(job.job_id)
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import closing
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from pydantic import ValidationError

from mantajobs.contract import CreateJobInput, CreateJobOutput, JobSummary, ListJobsInput, ListJobsOutput
from mantajobs.core.executor import ExecutorResponse, HttpRequestExecutor, RequestExecutor, Signer
from mantajobs.core.schema import ClientConfig
from mantajobs.core.stream import iter_json_values
from mantajobs.errors import (
    JobDecodeError,
    JobRequestError,
    MalformedLocationError,
    RequestError,
    StreamDecodeError,
)

logger = logging.getLogger(__name__)

RESULT_SET_SIZE_HEADER = "Result-Set-Size"


def parse_job_location(location: str | None) -> str:
    """Extract the job ID from a create response Location header.

    The value looks like /{account}/jobs/{job_id}, possibly as an absolute
    URL and possibly with a trailing slash or query string.

    Raises:
        MalformedLocationError: If no ID follows a "jobs" segment
    """
    if not location:
        raise MalformedLocationError("CreateJob", "CreateJob response has no Location header")

    segments = [s for s in urlsplit(location).path.split("/") if s]
    if len(segments) < 2 or segments[-2] != "jobs":
        raise MalformedLocationError("CreateJob", f"CreateJob response has malformed Location: {location!r}")
    return segments[-1]


def parse_result_set_size(headers: Mapping[str, str]) -> int:
    """Total number of matching jobs, or 0 when the header is missing or invalid."""
    value = headers.get(RESULT_SET_SIZE_HEADER)
    if value is None or not value.strip().isdecimal():
        logger.debug("Ignoring %s header: %r", RESULT_SET_SIZE_HEADER, value)
        return 0
    return int(value)


class JobListing:
    """One page of jobs, decoded lazily from the response stream.

    Iterating yields JobSummary records in service order. The listing is
    finite and can be iterated only once. The response body is closed when
    iteration finishes, fails, or the listing is closed, whichever is first.

    Usage:
        with client.iter_jobs(ListJobsInput(limit=100)) as listing:
            for job in listing:
                ...
    """

    def __init__(self, response: ExecutorResponse):
        self.result_set_size = parse_result_set_size(response.headers)
        self._body = response.body
        self._closed = False
        self._started = False

    def __iter__(self) -> Iterator[JobSummary]:
        if self._closed:
            raise RuntimeError("JobListing is exhausted or closed")
        if self._started:
            raise RuntimeError("JobListing can only be iterated once")
        self._started = True
        return self._decode()

    def _decode(self) -> Iterator[JobSummary]:
        try:
            for value in iter_json_values(self._body):
                yield JobSummary.model_validate(value)
        except (StreamDecodeError, ValidationError) as e:
            raise JobDecodeError("ListJobs", f"Error decoding ListJobs response: {e}") from e
        except RequestError as e:
            raise JobRequestError("ListJobs", f"Error reading ListJobs response: {e}") from e
        finally:
            self.close()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._body.close()

    def __enter__(self) -> "JobListing":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@dataclass(frozen=True)
class JobClient:
    """Client for the job lifecycle endpoints under /{account}/jobs.

    Holds only immutable configuration, so one instance can be shared across
    threads; every call performs its own request.
    """

    config: ClientConfig
    executor: RequestExecutor = field(repr=False)

    @classmethod
    def from_config(cls, config: ClientConfig, signers: Sequence[Signer] = ()) -> "JobClient":
        return cls(config=config, executor=HttpRequestExecutor.from_config(config, signers))

    def _jobs_path(self, *parts: str) -> str:
        return "/".join([f"/{self.config.account}/jobs", *parts])

    def create_job(self, spec: CreateJobInput) -> CreateJobOutput:
        """Submit a new job.

        Not idempotent: calling it twice creates two jobs.

        Raises:
            JobRequestError: If the request fails
            MalformedLocationError: If the response does not identify the job
        """
        try:
            response = self.executor.execute("POST", self._jobs_path(), json_body=spec.to_payload())
        except RequestError as e:
            raise JobRequestError("CreateJob", f"Error executing CreateJob request: {e}") from e

        with closing(response.body):
            job_id = parse_job_location(response.headers.get("Location"))

        logger.info("Created job %s (%s, %d phases)", job_id, spec.name, len(spec.phases))
        return CreateJobOutput(job_id=job_id)

    def add_job_inputs(self, job_id: str, object_paths: Sequence[str]) -> None:
        """Submit object paths as inputs to a job whose input is still open.

        May be called repeatedly; the service appends each batch.
        """
        if not object_paths:
            raise ValueError("add_job_inputs requires at least one object path")
        if any("\n" in p for p in object_paths):
            raise ValueError("object paths must not contain newlines")

        body = "\n".join(object_paths).encode("utf-8")
        try:
            response = self.executor.execute_raw(
                "POST",
                self._jobs_path(job_id, "live", "in"),
                headers={"Content-Type": "text/plain"},
                body=body,
            )
        except RequestError as e:
            raise JobRequestError("AddJobInputs", f"Error executing AddJobInputs request: {e}") from e

        response.body.close()
        logger.debug("Added %d inputs to job %s", len(object_paths), job_id)

    def end_job_input(self, job_id: str) -> None:
        """Close the input stream of a job; no more add_job_inputs calls may follow."""
        self._post_empty("EndJobInput", self._jobs_path(job_id, "live", "in", "end"))
        logger.debug("Ended input for job %s", job_id)

    def cancel_job(self, job_id: str) -> None:
        """Request cancellation of a job.

        Cancellation is asynchronous and best effort: success only means the
        request was accepted. Short jobs whose input is already closed will
        likely run to completion anyway. Most useful while input is still
        open or for long-running jobs.
        """
        self._post_empty("CancelJob", self._jobs_path(job_id, "live", "cancel"))
        logger.info("Requested cancellation of job %s", job_id)

    def _post_empty(self, operation: str, path: str) -> None:
        try:
            response = self.executor.execute_raw("POST", path)
        except RequestError as e:
            raise JobRequestError(operation, f"Error executing {operation} request: {e}") from e
        response.body.close()

    def iter_jobs(self, query: ListJobsInput | None = None) -> JobListing:
        """Request one page of jobs and decode it lazily.

        Raises:
            JobRequestError: If the request fails
        """
        query = query or ListJobsInput()
        try:
            response = self.executor.execute("GET", self._jobs_path(), query=query.to_query())
        except RequestError as e:
            raise JobRequestError("ListJobs", f"Error executing ListJobs request: {e}") from e
        return JobListing(response)

    def list_jobs(self, query: ListJobsInput | None = None) -> ListJobsOutput:
        """Fetch one page of jobs.

        All or nothing: if any record fails to decode, nothing is returned.
        Callers paginate by repeating the call with a new marker until they
        have result_set_size jobs or receive an empty page.

        Raises:
            JobRequestError: If the request fails
            JobDecodeError: If the response stream is malformed
        """
        with self.iter_jobs(query) as listing:
            jobs = list(listing)
        return ListJobsOutput(jobs=jobs, result_set_size=listing.result_set_size)
