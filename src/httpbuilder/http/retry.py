# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry orchestration on top of a client; the request pipeline itself never retries."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import ApiUnreachableError
from .client import Client
from .models import RequestFragments

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Retry policy derived from HttpSettings."""

    max_attempts: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> RetryConfig:
        """Build a retry config from the shared HttpSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
        )


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed HttpSettings."""
    return RetryConfig.from_settings(load_http_settings())


async def send_with_retries(
    client: Client,
    fragments: RequestFragments | Mapping[str, Any] | None = None,
    *,
    retry_config: RetryConfig | None = None,
    retry_on: tuple[type[BaseException], ...] = (ApiUnreachableError,),
) -> Any:
    """
    Send through `client`, re-sending with an incremented attempt number on `retry_on` errors.

    Only transport-level failures are retried by default; status failures and
    everything else propagate on the first attempt.
    """
    cfg = retry_config or build_default_retry_config()
    if fragments is None:
        request = RequestFragments()
    elif isinstance(fragments, RequestFragments):
        request = fragments
    else:
        request = RequestFragments.from_mapping(fragments)

    attempt = request.attempt_number or 1
    last_attempt = attempt + max(1, cfg.max_attempts) - 1
    delay = cfg.initial_delay

    while True:
        try:
            return await client.send(dataclasses.replace(request, attempt_number=attempt))
        except retry_on as exc:
            if attempt >= last_attempt:
                logger.debug("Giving up after attempt %d: %s", attempt, exc)
                raise
            logger.debug("Attempt %d failed (%s); retrying in %.2fs", attempt, exc, delay)
        await asyncio.sleep(delay)
        delay *= cfg.backoff_factor
        attempt += 1


__all__ = ["RetryConfig", "build_default_retry_config", "send_with_retries"]
