# SPDX-License-Identifier: MIT

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from .. import utils
from ..types.oauth2 import Token, Webhook

__all__ = (
    "OAuth2Token",
)


class OAuth2Token:
    """A token object returned by the token endpoint.

    Parameters
    -----------
    token_data: :class:`dict`
        The decoded token payload. Must contain ``access_token``.
    """

    __slots__ = ("_token_data", "_access_token", "_token_type", "_refresh_token", "_scopes", "_expires_at")

    def __init__(self, token_data: Token) -> None:
        self._token_data: Token = token_data
        self._access_token: str = token_data["access_token"]
        self._token_type: str = token_data.get("token_type", "Bearer")
        self._refresh_token: Optional[str] = token_data.get("refresh_token")
        self._scopes: List[str] = token_data.get("scope", "").split()
        self._expires_at: Optional[datetime] = None

        if "expires_in" in token_data:
            self._expires_at = utils.utcnow() + timedelta(seconds=token_data["expires_in"])

    def __repr__(self) -> str:
        return f"<OAuth2Token token_type={self._token_type!r} scopes={self._scopes!r} expires_at={self._expires_at!r}>"

    @classmethod
    def from_payload(cls, payload: Any) -> Optional[OAuth2Token]:
        """Builds a token from a decoded payload, or returns ``None`` if the payload is not a token."""
        if isinstance(payload, dict) and payload.get("access_token"):
            return cls(payload)  # type: ignore
        return None

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def token_type(self) -> str:
        return self._token_type

    @property
    def refresh_token(self) -> Optional[str]:
        return self._refresh_token

    @property
    def scopes(self) -> List[str]:
        return list(self._scopes)

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._expires_at

    @property
    def webhook(self) -> Optional[Webhook]:
        """The incoming webhook created by the webhook authorization flow, if any."""
        return self._token_data.get("webhook")

    @property
    def expired(self) -> bool:
        if self._expires_at is None:
            return False
        return utils.utcnow() >= self._expires_at

    def get_auth_header(self) -> Dict[str, str]:
        return {"Authorization": f"{self.token_type} {self.access_token}"}

    def to_dict(self) -> Token:
        return self._token_data
