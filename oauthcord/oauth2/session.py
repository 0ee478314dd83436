# SPDX-License-Identifier: MIT

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from ..http import HTTPClient
from ..resources import ResourceClient
from ..result import ApiResult, ValidationError
from ..scopes import ScopesLike
from ..types.snowflake import Snowflake
from .client import OAuth2Client
from .token import OAuth2Token

if TYPE_CHECKING:
    from ..client import Client

__all__ = (
    "OAuth2Session",
)

_log = logging.getLogger(__name__)


class OAuth2Session:
    """The requests of one logged-in user.

    A session owns its own credential store, so several sessions created from
    the same :class:`~oauthcord.client.Client` never see each other's
    tokens. Tokens are only replaced by :meth:`login`, :meth:`refresh` and
    :meth:`revoke`; an expired token is not refreshed on its own.

    Parameters
    -----------
    client: :class:`~oauthcord.client.Client`
        The client to share the application credential and transport with.
    token: Optional[:class:`OAuth2Token`]
        Initial access token to use
    """

    def __init__(self, client: Client, token: Optional[OAuth2Token] = None) -> None:
        self.token: Optional[OAuth2Token] = token
        credentials = client.credentials.fork(token.access_token if token else "")
        self.http: HTTPClient = client.http.with_credentials(credentials)
        self.oauth2: OAuth2Client = OAuth2Client(self.http, scopes=client.oauth2.scopes, api_base=client.api_base)
        self.resources: ResourceClient = ResourceClient(self.http, api_base=client.api_base)

    def __repr__(self) -> str:
        return f"<OAuth2Session token={self.token!r}>"

    def _store(self, result: ApiResult) -> ApiResult:
        token = OAuth2Token.from_payload(result.payload)
        if token is not None:
            self.token = token
            self.http.credentials.set_access_token(token.access_token)
        else:
            _log.debug("Token endpoint returned no access token, keeping the current one.")
        return result

    async def login(self, code: str, redirect_uri: str = "") -> ApiResult:
        """Exchanges an authorization code and keeps the token on success."""
        return self._store(await self.oauth2.exchange_code(code, redirect_uri))

    async def refresh(self, scopes: ScopesLike) -> Union[ApiResult, ValidationError]:
        """Refreshes the current token and keeps the new one on success.

        Returns a :class:`~oauthcord.result.ValidationError` without sending
        anything when the session has no refresh token.
        """
        if self.token is None or not self.token.refresh_token:
            return ValidationError("The session has no refresh token.")
        return self._store(await self.oauth2.refresh_token(scopes, self.token.refresh_token))

    async def check(self) -> ApiResult:
        """Fetches information about the current token"""
        return await self.oauth2.check_token()

    async def fetch_user(self) -> ApiResult:
        """Fetches the authenticated user's info"""
        return await self.resources.call("get_current_user")  # type: ignore

    async def fetch_connections(self) -> ApiResult:
        """Fetches the authenticated user's connections"""
        return await self.resources.call("get_user_connections")  # type: ignore

    async def fetch_guilds(self) -> ApiResult:
        """Fetches the authenticated user's guilds"""
        return await self.resources.call("get_user_guilds")  # type: ignore

    async def fetch_guild_member(self, guild_id: Snowflake) -> ApiResult:
        """Fetches the authenticated user's member info for a guild"""
        return await self.resources.call("get_user_guild_member", guild_id=guild_id)  # type: ignore

    async def join_guild(self, guild_id: Snowflake, user_id: Snowflake, **fields: Any) -> Union[ApiResult, ValidationError]:
        """Adds the user to a guild. The application's bot must be in the guild."""
        if self.token is None:
            return ValidationError("The session has no access token to join a guild with.")
        body = {"access_token": self.token.access_token, **fields}
        return await self.resources.call("add_guild_member", body, guild_id=guild_id, user_id=user_id)

    async def revoke(self) -> None:
        """Revokes the current access token"""
        if self.token:
            await self.oauth2.revoke_token(self.token.access_token)
            self.token = None
            self.http.credentials.set_access_token("")
