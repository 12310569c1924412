# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request data models shared by the pipeline, clients and vendor adapters."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .headers import OMITTED, HeaderOption

Headers = dict[str, str]

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"})


@dataclass(frozen=True)
class RequestDescriptor:
    """Canonical, fully composed request handed to the vendor request adapter."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: str | None = None
    attempt_number: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Mapping form for dict-shaped transports; `body` is left out when there is none."""
        data: dict[str, Any] = {
            "method": self.method,
            "url": self.url,
            "headers": None if self.headers is None else dict(self.headers),
            "attempt_number": self.attempt_number,
        }
        if self.body is not None:
            data["body"] = self.body
        return data


@dataclass
class RequestFragments:
    """
    Caller-supplied pieces of a request, before composition.

    `headers` accepts a `HeaderOption`, a mapping, `None` (send no headers) or
    the `OMITTED` sentinel (let the client's header policy decide), and is
    stored as a `HeaderOption`.
    """

    method: str | None = None
    url: str | None = None
    path_params: Sequence[str | int] = ()
    query_params: Mapping[str, Any] | None = None
    headers: Any = OMITTED
    data: Any = None
    attempt_number: int | None = None

    def __post_init__(self) -> None:
        self.headers = HeaderOption.coerce(self.headers)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RequestFragments:
        """
        Build fragments from a keyword-style mapping.

        A present `headers` key set to `None` means "no headers"; a missing key
        leaves the decision to the client's header policy.
        """
        fields = dict(data)
        headers = fields.pop("headers", OMITTED)
        return cls(headers=headers, **fields)


__all__ = ["HTTP_METHODS", "Headers", "RequestDescriptor", "RequestFragments"]
