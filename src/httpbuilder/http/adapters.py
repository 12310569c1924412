# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Vendor adapters, per-client configuration and a programmable stub transport."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Union

from ..errors import BuilderConfigurationError
from .headers import HeaderPolicy, HeaderProducer
from .models import RequestDescriptor

MaybeAwaitable = Union[Any, Awaitable[Any]]

RequestAdapter = Callable[[RequestDescriptor], Awaitable[Any]]
ResponseAdapter = Callable[[Any], MaybeAwaitable]
ErrorAdapter = Callable[[Exception], MaybeAwaitable]
SuccessHandler = Callable[[Any, RequestDescriptor], MaybeAwaitable]
FailureHandler = Callable[[Exception, RequestDescriptor], MaybeAwaitable]


def _require_callable(name: str, value: Any, *, optional: bool = False) -> None:
    if value is None and optional:
        return
    if not callable(value):
        raise BuilderConfigurationError(f"{name} must be callable, got {type(value).__name__}")


@dataclass(frozen=True)
class VendorAdapters:
    """
    Transport-level adapters shared by every client a builder produces.

    - request_adapter: executes the descriptor, returns an awaitable raw response
    - response_adapter: maps a raw response to a value (may raise to signal failure)
    - error_adapter: maps a raised error to a value, or raises the translated error
    """

    request_adapter: RequestAdapter
    response_adapter: ResponseAdapter
    error_adapter: ErrorAdapter

    def __post_init__(self) -> None:
        _require_callable("request_adapter", self.request_adapter)
        _require_callable("response_adapter", self.response_adapter)
        _require_callable("error_adapter", self.error_adapter)


@dataclass(frozen=True)
class ClientConfig:
    """Configuration captured by one client; every field is optional."""

    base_url: str | None = None
    get_default_headers: HeaderProducer | None = None
    get_fixed_headers: HeaderProducer | None = None
    success_handler: SuccessHandler | None = None
    failure_handler: FailureHandler | None = None

    def __post_init__(self) -> None:
        _require_callable("get_default_headers", self.get_default_headers, optional=True)
        _require_callable("get_fixed_headers", self.get_fixed_headers, optional=True)
        _require_callable("success_handler", self.success_handler, optional=True)
        _require_callable("failure_handler", self.failure_handler, optional=True)

    @property
    def header_policy(self) -> HeaderPolicy:
        return HeaderPolicy(
            get_default_headers=self.get_default_headers,
            get_fixed_headers=self.get_fixed_headers,
        )


class StubRequestAdapter:
    """Deterministic, programmable request adapter for tests and sandboxes."""

    def __init__(self, responses: dict[str, Any] | None = None, default: Any = None):
        self._responses = responses or {}
        self._default = default
        self.requests: list[RequestDescriptor] = []

    def add(self, url: str, response: Any) -> None:
        """Register a response (or an exception instance to raise) for a URL."""
        self._responses[url] = response

    async def __call__(self, request: RequestDescriptor) -> Any:
        self.requests.append(request)
        response = self._responses.get(request.url, self._default)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise LookupError(f"No stubbed response configured for {request.url}")
        return response


__all__ = [
    "ClientConfig",
    "ErrorAdapter",
    "FailureHandler",
    "RequestAdapter",
    "ResponseAdapter",
    "StubRequestAdapter",
    "SuccessHandler",
    "VendorAdapters",
]
