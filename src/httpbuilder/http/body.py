# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request body encoding."""

from __future__ import annotations

import json
from typing import Any

from ..errors import BodyEncodingError


def encode_body(data: Any) -> str | None:
    """
    Return the wire-ready body for `data`.

    `None` means "no body"; strings pass through untouched; anything else is
    serialized to compact JSON.
    """
    if data is None:
        return None
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise BodyEncodingError(f"Request data is not JSON serializable: {exc}") from exc


__all__ = ["encode_body"]
