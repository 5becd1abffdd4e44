# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Frozen dataclass schema for client configuration.

Uses marshmallow_dataclass for type-safe configuration with validation.
The config is frozen (immutable) after creation and shared read-only by
every operation.
"""

from dataclasses import field
from typing import ClassVar, Type

from marshmallow import Schema, validate
from marshmallow_dataclass import dataclass


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the jobs service.

    Attributes:
        endpoint: Base URL of the service, e.g. https://us-east.manta.joyent.com
        account: Account name; every job path is rooted at /{account}/jobs
        timeout: Per-request timeout in seconds
    """

    endpoint: str = field(metadata={"validate": validate.URL(require_tld=False)})
    account: str = field(metadata={"validate": validate.Length(min=1)})
    timeout: float = field(default=30.0, metadata={"validate": validate.Range(min=0, min_inclusive=False)})

    Schema: ClassVar[Type[Schema]] = Schema

    @property
    def base_url(self) -> str:
        return self.endpoint.rstrip("/")
