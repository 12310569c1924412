# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL composition helpers.

Query strings are built crudely: `key=value` pairs joined with `&`, with no
percent-encoding. Callers pre-encode values containing reserved characters.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)

NO_DESTINATION = "http://no-destination.invalid"

_BARE_DOMAIN_RE = re.compile(r"^[\w-]+(\.[\w-]+)*\.[a-zA-Z]{2,}(:\d+)?(/|\?|$)")

QueryPair = tuple[str, str | None]


def is_absolute_url(url: str | None) -> bool:
    """Return True when the URL carries its own scheme and host."""
    parts = urlsplit(str(url or ""))
    return bool(parts.scheme and parts.netloc)


def build_crude_query_string(params: Mapping[object, object]) -> str:
    """
    Join `key=value` pairs with `&`, without any encoding.

    Crude enough to double as an `application/x-www-form-urlencoded` body builder.
    """
    return "&".join(f"{key}={_render_value(value)}" for key, value in params.items())


def _render_value(value: object) -> str:
    return "" if value is None else str(value)


def _warn_if_schemeless(url: str) -> None:
    if _BARE_DOMAIN_RE.match(url):
        logger.warning("URL %r has no scheme; did you mean 'https://%s'?", url, url)


def _join_path(path: str, segment: str) -> str:
    if not segment:
        return path
    return path.rstrip("/") + "/" + segment.lstrip("/")


def _parse_query(query: str) -> list[QueryPair]:
    pairs: list[QueryPair] = []
    for chunk in query.split("&"):
        if not chunk:
            continue
        key, sep, value = chunk.partition("=")
        pairs.append((key, value if sep else None))
    return pairs


def _render_query(pairs: Iterable[QueryPair]) -> str:
    return "&".join(key if value is None else f"{key}={value}" for key, value in pairs)


def _set_query_param(pairs: list[QueryPair], key: str, value: str | None) -> None:
    """Overwrite `key` in place (dropping later duplicates) or append it."""
    positions = [i for i, (existing, _) in enumerate(pairs) if existing == key]
    if not positions:
        pairs.append((key, value))
        return
    pairs[positions[0]] = (key, value)
    for index in reversed(positions[1:]):
        del pairs[index]


def compose_url(
    base_url: str | None = None,
    url: str | None = None,
    path_params: Iterable[str | int] | str | int = (),
    query_params: Mapping[object, object] | None = None,
) -> str:
    """
    Build the absolute URL for one request.

    An absolute `url` replaces `base_url` for this request; a relative one is
    appended to it. A protocol-relative `//host/path` url takes the scheme of
    `base_url` (http when there is none). Path params are appended in order, a
    lone string or number being one segment, then query params are set key by
    key, overwriting keys already present in the query string.

    A schemeless url that looks like a domain ("example.com/x") only warns
    when there is no `base_url` to append it to.
    """
    target = str(url) if url else ""
    if target.startswith("//"):
        scheme = urlsplit(str(base_url)).scheme if base_url and is_absolute_url(base_url) else ""
        target = f"{scheme or 'http'}:{target}"

    if target and is_absolute_url(target):
        base, relative = target, ""
    else:
        if base_url:
            base = str(base_url)
            if not is_absolute_url(base):
                _warn_if_schemeless(base)
        else:
            if target:
                _warn_if_schemeless(target)
            base = NO_DESTINATION
        relative = target

    parts = urlsplit(base)
    path = parts.path
    pairs = _parse_query(parts.query)

    if relative:
        relative = relative.partition("#")[0]
        relative_path, _, relative_query = relative.partition("?")
        path = _join_path(path, relative_path)
        for key, value in _parse_query(relative_query):
            _set_query_param(pairs, key, value)

    if isinstance(path_params, (str, int)):
        path_params = (path_params,)
    for segment in path_params or ():
        path = _join_path(path, str(segment))

    for key, value in (query_params or {}).items():
        _set_query_param(pairs, str(key), _render_value(value))

    return urlunsplit((parts.scheme, parts.netloc, path, _render_query(pairs), parts.fragment))


__all__ = [
    "NO_DESTINATION",
    "build_crude_query_string",
    "compose_url",
    "is_absolute_url",
]
