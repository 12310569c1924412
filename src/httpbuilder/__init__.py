# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httpbuilder package entrypoint.

A two-layer HTTP client builder: `get_builder` binds transport-level vendor
adapters once, and the factory it returns produces one client per API, each
with its own base URL, header policy and success/failure handlers.
"""

from .config import HttpSettings, load_http_settings
from .errors import (
    ApiError,
    ApiResponseError,
    ApiUnreachableError,
    BodyEncodingError,
    BuilderConfigurationError,
    HttpBuilderError,
    InvalidAttemptNumberError,
    InvalidHeadersError,
    UnsupportedMethodError,
)
from .http import (
    OMITTED,
    Client,
    ClientConfig,
    ClientFactory,
    HeaderOption,
    HttpxVendor,
    RequestDescriptor,
    RequestFragments,
    RetryConfig,
    VendorAdapters,
    create_httpx_builder,
    get_builder,
    send_with_retries,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "OMITTED",
    "ApiError",
    "ApiResponseError",
    "ApiUnreachableError",
    "BodyEncodingError",
    "BuilderConfigurationError",
    "Client",
    "ClientConfig",
    "ClientFactory",
    "HeaderOption",
    "HttpBuilderError",
    "HttpSettings",
    "HttpxVendor",
    "InvalidAttemptNumberError",
    "InvalidHeadersError",
    "RequestDescriptor",
    "RequestFragments",
    "RetryConfig",
    "UnsupportedMethodError",
    "VendorAdapters",
    "create_httpx_builder",
    "get_builder",
    "load_http_settings",
    "send_with_retries",
    "setup_logging",
    "__version__",
]
