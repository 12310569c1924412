# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Vendor builder, client factory and the per-API client."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import BuilderConfigurationError
from .adapters import (
    ClientConfig,
    ErrorAdapter,
    FailureHandler,
    RequestAdapter,
    ResponseAdapter,
    SuccessHandler,
    VendorAdapters,
)
from .headers import OMITTED, HeaderProducer
from .models import RequestFragments
from .pipeline import RequestPipeline
from .url import build_crude_query_string


class Client:
    """
    HTTP client tailored to one API.

    Holds no state besides its captured configuration; every call composes a
    fresh request descriptor.
    """

    build_crude_query_string = staticmethod(build_crude_query_string)

    def __init__(self, pipeline: RequestPipeline):
        self._pipeline = pipeline

    @property
    def config(self) -> ClientConfig:
        return self._pipeline.config

    @property
    def base_url(self) -> str | None:
        return self._pipeline.config.base_url

    async def send(self, fragments: RequestFragments | Mapping[str, Any] | None = None, **fields: Any) -> Any:
        """Send a request built from fragments, a mapping of fragment fields, or keywords."""
        if fragments is None:
            request = RequestFragments(**fields)
        elif isinstance(fragments, RequestFragments):
            request = dataclasses.replace(fragments, **fields) if fields else fragments
        else:
            request = RequestFragments.from_mapping({**fragments, **fields})
        return await self._pipeline.send(request)

    async def get(
        self,
        url: str | None = None,
        *,
        query_params: Mapping[str, Any] | None = None,
        path_params: Sequence[str | int] = (),
        headers: Any = OMITTED,
        attempt_number: int | None = None,
    ) -> Any:
        return await self._send_without_body("GET", url, query_params, path_params, headers, attempt_number)

    async def delete(
        self,
        url: str | None = None,
        *,
        query_params: Mapping[str, Any] | None = None,
        path_params: Sequence[str | int] = (),
        headers: Any = OMITTED,
        attempt_number: int | None = None,
    ) -> Any:
        return await self._send_without_body("DELETE", url, query_params, path_params, headers, attempt_number)

    async def options(
        self,
        url: str | None = None,
        *,
        query_params: Mapping[str, Any] | None = None,
        path_params: Sequence[str | int] = (),
        headers: Any = OMITTED,
        attempt_number: int | None = None,
    ) -> Any:
        return await self._send_without_body("OPTIONS", url, query_params, path_params, headers, attempt_number)

    async def post(
        self,
        url: str | None = None,
        data: Any = None,
        *,
        query_params: Mapping[str, Any] | None = None,
        path_params: Sequence[str | int] = (),
        headers: Any = OMITTED,
        attempt_number: int | None = None,
    ) -> Any:
        return await self._send_with_body("POST", url, data, query_params, path_params, headers, attempt_number)

    async def put(
        self,
        url: str | None = None,
        data: Any = None,
        *,
        query_params: Mapping[str, Any] | None = None,
        path_params: Sequence[str | int] = (),
        headers: Any = OMITTED,
        attempt_number: int | None = None,
    ) -> Any:
        return await self._send_with_body("PUT", url, data, query_params, path_params, headers, attempt_number)

    async def patch(
        self,
        url: str | None = None,
        data: Any = None,
        *,
        query_params: Mapping[str, Any] | None = None,
        path_params: Sequence[str | int] = (),
        headers: Any = OMITTED,
        attempt_number: int | None = None,
    ) -> Any:
        return await self._send_with_body("PATCH", url, data, query_params, path_params, headers, attempt_number)

    async def _send_without_body(self, method, url, query_params, path_params, headers, attempt_number) -> Any:  # noqa: ANN001
        return await self._send_with_body(method, url, None, query_params, path_params, headers, attempt_number)

    async def _send_with_body(self, method, url, data, query_params, path_params, headers, attempt_number) -> Any:  # noqa: ANN001
        fragments = RequestFragments(
            method=method,
            url=url,
            path_params=path_params,
            query_params=query_params,
            headers=headers,
            data=data,
            attempt_number=attempt_number,
        )
        return await self._pipeline.send(fragments)


class ClientFactory:
    """
    Produces clients that share one set of vendor adapters.

    `resource` is whatever owns the vendor's transport (an `HttpxVendor`, say);
    `aclose()` and `async with` release it.
    """

    def __init__(self, vendor: VendorAdapters, *, resource: Any = None):
        self.vendor = vendor
        self.resource = resource

    def __call__(
        self,
        config: ClientConfig | None = None,
        *,
        base_url: str | None = None,
        get_default_headers: HeaderProducer | None = None,
        get_fixed_headers: HeaderProducer | None = None,
        success_handler: SuccessHandler | None = None,
        failure_handler: FailureHandler | None = None,
    ) -> Client:
        options = {
            "base_url": base_url,
            "get_default_headers": get_default_headers,
            "get_fixed_headers": get_fixed_headers,
            "success_handler": success_handler,
            "failure_handler": failure_handler,
        }
        if config is None:
            config = ClientConfig(**options)
        elif any(value is not None for value in options.values()):
            raise BuilderConfigurationError("Pass either a ClientConfig or keyword options, not both")
        return Client(RequestPipeline(self.vendor, config))

    async def aclose(self) -> None:
        if self.resource is not None:
            await self.resource.aclose()

    async def __aenter__(self) -> ClientFactory:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def get_builder(
    request_adapter: RequestAdapter | None = None,
    response_adapter: ResponseAdapter | None = None,
    error_adapter: ErrorAdapter | None = None,
    *,
    vendor: VendorAdapters | None = None,
) -> ClientFactory:
    """Bind transport-level adapters and return a factory for per-API clients."""
    if vendor is None:
        vendor = VendorAdapters(
            request_adapter=request_adapter,
            response_adapter=response_adapter,
            error_adapter=error_adapter,
        )
    elif any(adapter is not None for adapter in (request_adapter, response_adapter, error_adapter)):
        raise BuilderConfigurationError("Pass either VendorAdapters or individual adapters, not both")
    return ClientFactory(vendor)


__all__ = ["Client", "ClientFactory", "get_builder"]
