# SPDX-License-Identifier: MIT

"""
oauthcord.result
~~~~~~~~~~~~~~~~

The shapes every operation returns.

* :class:`Success` - the decoded JSON body of a response. This includes the
  platform's own error envelopes, which are passed through untouched; use
  :attr:`ApiResult.is_error` to tell them apart.
* :class:`Failure` - the response body was empty or not JSON.
* :class:`ValidationError` - the call was refused locally and nothing was sent.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

__all__ = (
    "Diagnostics",
    "ApiResult",
    "Success",
    "Failure",
    "ValidationError",
    "INVALID_RESPONSE",
)

INVALID_RESPONSE: Dict[str, Any] = {"code": 0, "message": "Empty or invalid JSON response."}


@dataclass(frozen=True)
class Diagnostics:
    """Raw transport information about a request.

    Attached to results of PUT and DELETE calls, whose successful responses
    have no body to inspect.
    """

    method: str
    url: str
    status: int
    elapsed: float
    headers: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "status": self.status,
            "elapsed": self.elapsed,
            "headers": dict(self.headers),
        }


@dataclass(frozen=True)
class ApiResult:
    """The outcome of a dispatched request.

    Attributes
    ----------
    payload: Any
        The decoded JSON body, exactly as the platform sent it.
    status: :class:`int`
        The HTTP status code. It plays no part in choosing between
        :class:`Success` and :class:`Failure`.
    diagnostics: Optional[:class:`Diagnostics`]
        Transport details, when requested.
    """

    payload: Any
    status: int = 0
    diagnostics: Optional[Diagnostics] = None

    ok = False

    @property
    def is_error(self) -> bool:
        """Whether the payload looks like an error rather than a resource.

        Matches the REST error envelope (``code`` and ``message``) and the
        OAuth2 error object (``error``).
        """
        payload = self.payload
        if not isinstance(payload, dict):
            return False
        return ("code" in payload and "message" in payload) or "error" in payload

    def __getitem__(self, key: Any) -> Any:
        return self.payload[key]

    def get(self, key: str, default: Any = None) -> Any:
        if isinstance(self.payload, dict):
            return self.payload.get(key, default)
        return default


@dataclass(frozen=True)
class Success(ApiResult):
    ok = True

    def __bool__(self) -> bool:
        return not self.is_error


@dataclass(frozen=True)
class Failure(ApiResult):
    def __bool__(self) -> bool:
        return False

    @property
    def is_error(self) -> bool:
        return True


class ValidationError(str):
    """A request refused before anything was sent.

    This is a :class:`str` holding the human readable message, so code that
    only prints the return value keeps working. Use ``isinstance`` to tell it
    apart from a result.
    """

    __slots__ = ()

    ok = False
    is_error = True

    @property
    def message(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return f"<ValidationError message={str(self)!r}>"

    def __bool__(self) -> bool:
        return False
