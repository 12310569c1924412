# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request composition and the vendor/consumer adapter chain."""

from __future__ import annotations

import inspect
import logging
from typing import Any

from ..errors import InvalidAttemptNumberError, UnsupportedMethodError
from .adapters import ClientConfig, VendorAdapters
from .body import encode_body
from .headers import HeaderOption, compose_headers
from .models import HTTP_METHODS, RequestDescriptor, RequestFragments
from .outcome import Failure, Outcome, Success
from .url import compose_url

logger = logging.getLogger(__name__)


async def _settle(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


def _resolve_attempt_number(attempt_number: int | None) -> int:
    if attempt_number is None:
        return 1
    if isinstance(attempt_number, bool) or not isinstance(attempt_number, int) or attempt_number < 1:
        raise InvalidAttemptNumberError(attempt_number)
    return attempt_number


class RequestPipeline:
    """
    Builds a `RequestDescriptor` from request fragments and runs it through the adapters.

    Vendor adapters always run; the client's success/failure handlers run only when
    configured. An error adapter that returns instead of raising turns the failure
    into a success, which is then routed to the success handler.
    """

    def __init__(self, vendor: VendorAdapters, config: ClientConfig | None = None):
        self.vendor = vendor
        self.config = config or ClientConfig()

    def build_descriptor(self, fragments: RequestFragments) -> RequestDescriptor:
        method = (fragments.method or "GET").upper()
        if method not in HTTP_METHODS:
            raise UnsupportedMethodError(method)

        url = compose_url(
            self.config.base_url,
            fragments.url,
            path_params=fragments.path_params,
            query_params=fragments.query_params,
        )
        headers = compose_headers(HeaderOption.coerce(fragments.headers), self.config.header_policy)
        body = encode_body(fragments.data)

        return RequestDescriptor(
            url=url,
            method=method,
            headers=headers,
            body=body,
            attempt_number=_resolve_attempt_number(fragments.attempt_number),
        )

    async def send(self, fragments: RequestFragments | None = None) -> Any:
        descriptor = self.build_descriptor(fragments or RequestFragments())
        logger.debug("Sending %s %s (attempt %d)", descriptor.method, descriptor.url, descriptor.attempt_number)
        outcome = await self._execute(descriptor)
        return await self._finish(outcome, descriptor)

    async def _execute(self, descriptor: RequestDescriptor) -> Outcome:
        try:
            raw = await _settle(self.vendor.request_adapter(descriptor))
            value = await _settle(self.vendor.response_adapter(raw))
        except Exception as exc:  # noqa: BLE001
            return await self._recover(exc, descriptor)
        return Success(value)

    async def _recover(self, exc: Exception, descriptor: RequestDescriptor) -> Outcome:
        try:
            value = await _settle(self.vendor.error_adapter(exc))
        except Exception as adapted:  # noqa: BLE001
            logger.debug("%s %s failed: %s", descriptor.method, descriptor.url, type(adapted).__name__)
            return Failure(adapted)
        logger.debug("%s %s recovered by error adapter from %s", descriptor.method, descriptor.url, type(exc).__name__)
        return Success(value)

    async def _finish(self, outcome: Outcome, descriptor: RequestDescriptor) -> Any:
        if isinstance(outcome, Success):
            if self.config.success_handler is None:
                return outcome.value
            return await _settle(self.config.success_handler(outcome.value, descriptor))

        if self.config.failure_handler is None:
            raise outcome.error
        return await _settle(self.config.failure_handler(outcome.error, descriptor))


__all__ = ["RequestPipeline"]
