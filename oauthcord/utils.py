# SPDX-License-Identifier: MIT

from __future__ import annotations

import datetime
import json
from typing import Any

__all__ = (
    "MISSING",
    "utcnow",
    "is_zero",
)


class _MissingSentinel:
    __slots__ = ()

    def __eq__(self, other) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    def __hash__(self) -> int:
        return 0

    def __repr__(self):
        return "..."


MISSING: Any = _MissingSentinel()


def utcnow() -> datetime.datetime:
    """A helper function to return an aware UTC datetime representing the current time."""
    return datetime.datetime.now(datetime.timezone.utc)


def is_zero(value: Any) -> bool:
    """Whether ``value`` is one of the "leave this part out" values (``0``, ``""``, ``False``, ``None``)."""
    return value is None or value is MISSING or value == 0 or value == ""


def _to_json(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=True)


def _from_json(data: str) -> Any:
    return json.loads(data)
