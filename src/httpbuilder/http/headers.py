# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header composition and normalization utilities.

A request can carry headers in three distinct ways, modelled by `HeaderOption`:

- omitted: the client's header policy decides (default headers, then fixed headers)
- explicitly none: the request is sent headerless, no producer is consulted
- explicit mapping: used as-is, with the client's fixed headers merged on top

HTTP header field names are case-insensitive (RFC 9110); `header_value` reads
response headers accordingly.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import InvalidHeadersError

HeaderProducer = Callable[[], Mapping[str, str]]


class _Omitted:
    """Sentinel for a `headers` keyword that the caller did not pass."""

    _instance: _Omitted | None = None

    def __new__(cls) -> _Omitted:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OMITTED"

    def __bool__(self) -> bool:
        return False


OMITTED: Any = _Omitted()


class HeaderMode(str, Enum):
    OMITTED = "omitted"
    NONE = "none"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class HeaderOption:
    """Tagged representation of the headers a caller supplied for one request."""

    mode: HeaderMode = HeaderMode.OMITTED
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def omitted(cls) -> HeaderOption:
        return cls(HeaderMode.OMITTED)

    @classmethod
    def none(cls) -> HeaderOption:
        return cls(HeaderMode.NONE)

    @classmethod
    def explicit(cls, headers: Mapping[str, str]) -> HeaderOption:
        if not isinstance(headers, Mapping):
            raise InvalidHeadersError(f"headers must be a mapping, got {type(headers).__name__}")
        return cls(HeaderMode.EXPLICIT, dict(headers))

    @classmethod
    def coerce(cls, value: Any) -> HeaderOption:
        """
        Map the keyword convention used by the public client onto the tagged form.

        `OMITTED` -> omitted, `None` -> explicitly none, mapping -> explicit.
        """
        if isinstance(value, HeaderOption):
            return value
        if value is OMITTED:
            return cls.omitted()
        if value is None:
            return cls.none()
        return cls.explicit(value)


@dataclass(frozen=True)
class HeaderPolicy:
    """Per-client header producers; both are zero-argument callables."""

    get_default_headers: HeaderProducer | None = None
    get_fixed_headers: HeaderProducer | None = None


def _produce(producer: HeaderProducer, label: str) -> dict[str, str]:
    produced = producer()
    if not isinstance(produced, Mapping):
        raise InvalidHeadersError(f"{label} must return a mapping, got {type(produced).__name__}")
    return dict(produced)


def compose_headers(option: HeaderOption, policy: HeaderPolicy | None = None) -> dict[str, str] | None:
    """
    Resolve the headers sent with a request.

    Precedence, lowest to highest: default headers < explicit headers < fixed headers.
    Explicitly-none short-circuits both producers and yields `None`.
    """
    policy = policy or HeaderPolicy()

    if option.mode is HeaderMode.NONE:
        return None

    if option.mode is HeaderMode.EXPLICIT:
        headers = dict(option.headers)
    elif policy.get_default_headers is not None:
        headers = _produce(policy.get_default_headers, "get_default_headers")
    else:
        headers = {}

    if policy.get_fixed_headers is not None:
        headers.update(_produce(policy.get_fixed_headers, "get_fixed_headers"))
    return headers


def header_value(
    headers: Mapping[object, object] | Iterable[tuple[object, object]] | None,
    name: str,
    default: str = "",
) -> str:
    """Return a header value using case-insensitive key matching (mappings, httpx.Headers or pairs)."""
    if not headers or not name:
        return default

    items = headers.items() if isinstance(headers, Mapping) else headers
    lower = str(name).lower()
    for key, value in items:
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = [
    "OMITTED",
    "HeaderMode",
    "HeaderOption",
    "HeaderPolicy",
    "HeaderProducer",
    "compose_headers",
    "header_value",
]
