# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client builder exports."""

from .adapters import ClientConfig, StubRequestAdapter, VendorAdapters
from .body import encode_body
from .client import Client, ClientFactory, get_builder
from .headers import (
    OMITTED,
    HeaderMode,
    HeaderOption,
    HeaderPolicy,
    compose_headers,
    header_value,
)
from .httpx_vendor import HttpxVendor, create_httpx_builder
from .models import HTTP_METHODS, Headers, RequestDescriptor, RequestFragments
from .outcome import Failure, Outcome, Success
from .pipeline import RequestPipeline
from .retry import RetryConfig, build_default_retry_config, send_with_retries
from .url import NO_DESTINATION, build_crude_query_string, compose_url, is_absolute_url

__all__ = [
    "HTTP_METHODS",
    "NO_DESTINATION",
    "OMITTED",
    "Client",
    "ClientConfig",
    "ClientFactory",
    "Failure",
    "HeaderMode",
    "HeaderOption",
    "HeaderPolicy",
    "Headers",
    "HttpxVendor",
    "Outcome",
    "RequestDescriptor",
    "RequestFragments",
    "RequestPipeline",
    "RetryConfig",
    "StubRequestAdapter",
    "Success",
    "VendorAdapters",
    "build_crude_query_string",
    "build_default_retry_config",
    "compose_headers",
    "compose_url",
    "create_httpx_builder",
    "encode_body",
    "get_builder",
    "header_value",
    "is_absolute_url",
    "send_with_retries",
]
