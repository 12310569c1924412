# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed vendor adapters."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import ApiError, ApiResponseError, ApiUnreachableError, categorize_exception
from .adapters import VendorAdapters
from .client import ClientFactory
from .headers import header_value
from .models import RequestDescriptor

logger = logging.getLogger(__name__)


def _response_data(response: httpx.Response) -> Any:
    if not response.content:
        return None
    if "json" in header_value(response.headers, "content-type").lower():
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class HttpxVendor:
    """Vendor adapters that execute request descriptors with an `httpx.AsyncClient`."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    async def request_adapter(self, request: RequestDescriptor) -> httpx.Response:
        """
        Send the descriptor and raise `httpx.HTTPStatusError` on 4xx/5xx.

        `headers=None` means no composed headers and no User-Agent from settings;
        httpx still sends its own defaults (Host, Accept, its User-Agent, ...).
        """
        headers = None if request.headers is None else dict(request.headers)
        if headers is not None and not header_value(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent

        logger.debug("httpx %s %s", request.method, request.url)
        response = await self._client.request(
            request.method,
            request.url,
            headers=headers,
            content=request.body,
        )
        response.raise_for_status()
        return response

    def response_adapter(self, response: httpx.Response) -> Any:
        return _response_data(response)

    def error_adapter(self, exc: Exception) -> Any:
        if isinstance(exc, ApiError):
            raise exc
        if isinstance(exc, httpx.HTTPStatusError):
            response = exc.response
            raise ApiResponseError(
                response.status_code,
                response.reason_phrase,
                _response_data(response),
                category=categorize_exception(exc),
            ) from exc
        if isinstance(exc, httpx.RequestError):
            raise ApiUnreachableError(category=categorize_exception(exc)) from exc
        raise ApiError(str(exc) or "Something went awry and you can probably fix it") from exc

    def adapters(self) -> VendorAdapters:
        return VendorAdapters(
            request_adapter=self.request_adapter,
            response_adapter=self.response_adapter,
            error_adapter=self.error_adapter,
        )

    def builder(self) -> ClientFactory:
        """Client factory over these adapters; closing it closes this vendor."""
        return ClientFactory(self.adapters(), resource=self)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxVendor:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_httpx_builder(settings: HttpSettings | None = None) -> ClientFactory:
    """
    Factory for a client builder wired to a fresh httpx-backed vendor.

    The builder owns the vendor's AsyncClient: use it as `async with` or call `aclose()`.
    """
    return HttpxVendor(settings).builder()


__all__ = ["HttpxVendor", "create_httpx_builder"]
