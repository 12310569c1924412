# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Two-way result type threaded through the adapter chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: Exception

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success, Failure]

__all__ = ["Failure", "Outcome", "Success"]
