# SPDX-License-Identifier: MIT

from __future__ import annotations

import logging
from typing import Optional, Union

from .. import urls
from ..credentials import ApplicationCredential, AuthMode
from ..http import HTTPClient, RequestSpec
from ..result import ApiResult, ValidationError
from ..scopes import ScopesLike, ScopeValidator
from ..types.snowflake import Snowflake

__all__ = (
    "OAuth2Client",
)

_log = logging.getLogger(__name__)

NO_VALID_SCOPES = "No valid scopes were defined."
NO_VALID_BOT_SCOPES = "No valid scopes defined."
PERMISSIONS_REQUIRED = "Permissions must be greater than 0."


def _anchor(url: str, text: str) -> str:
    # every dynamic part of url is percent-encoded already; text is HTML.
    return f"<a href='{url}'>{text}</a>"


class OAuth2Client:
    """Handles the OAuth2 flows of the application.

    Every request made here goes through one call of
    :meth:`HTTPClient.execute <oauthcord.http.HTTPClient.execute>` and hands
    back the decoded token endpoint answer, error objects included.

    Parameters
    -----------
    http: :class:`~oauthcord.http.HTTPClient`
        The dispatcher to send requests with. Its credential store supplies
        the client id, secret and redirect uri.
    scopes: Optional[:class:`~oauthcord.scopes.ScopeValidator`]
        The validator for requested scopes.
    api_base: :class:`str`
        The API root.
    """

    def __init__(
        self,
        http: HTTPClient,
        *,
        scopes: Optional[ScopeValidator] = None,
        api_base: str = urls.DISCORD_API_URL,
    ) -> None:
        self.http: HTTPClient = http
        self.scopes: ScopeValidator = scopes or ScopeValidator()
        self.api_base: str = api_base

    @property
    def application(self) -> ApplicationCredential:
        return self.http.credentials.application

    def _credentials_form(self, **fields: str) -> dict:
        application = self.application
        return {
            "client_id": str(application.client_id),
            "client_secret": application.client_secret,
            **fields,
        }

    # Authorization links

    def authorize_url(self, scopes: ScopesLike, state: str = "") -> Union[str, ValidationError]:
        """Gets the authorization-code flow URL

        Parameters
        -----------
        scopes: Union[:class:`str`, List[:class:`str`]]
            The scopes to request, as a list or a comma separated string.
        state: :class:`str`
            The state to include in the auth request
        """
        scope = self.scopes.serialize(scopes)
        if not scope:
            return ValidationError(NO_VALID_SCOPES)
        application = self.application
        return urls.authorize_url(application.client_id, application.redirect_uri, scope, state)

    def authorize_link(self, scopes: ScopesLike, text: str = "Login", state: str = "") -> Union[str, ValidationError]:
        """Gets an HTML anchor pointing at :meth:`authorize_url`

        Parameters
        -----------
        scopes: Union[:class:`str`, List[:class:`str`]]
            The scopes to request.
        text: :class:`str`
            The link text. HTML is allowed.
        state: :class:`str`
            The state to include in the auth request
        """
        url = self.authorize_url(scopes, state)
        if isinstance(url, ValidationError):
            return url
        return _anchor(url, text)

    def implicit_grant_url(self, scopes: ScopesLike, state: str = "") -> str:
        """Gets the implicit grant URL.

        The redirect receives ``access_token``, ``token_type``, ``expires_in``,
        ``scope`` and ``state`` as URL fragments. This flow never issues a
        refresh token.
        """
        return urls.implicit_grant_url(self.application.client_id, self.scopes.serialize(scopes), state)

    def bot_authorize_url(
        self,
        scopes: ScopesLike,
        permissions: int = 0,
        guild_id: Optional[Snowflake] = 0,
        disable_guild_select: bool = False,
    ) -> Union[str, ValidationError]:
        """Gets the URL to add the bot to a guild

        Parameters
        -----------
        scopes: Union[:class:`str`, List[:class:`str`]]
            The scopes to request. ``bot`` should be one of them.
        permissions: :class:`int`
            The permission bitfield to request. Must be greater than 0.
        guild_id: Optional[:class:`Snowflake`]
            A guild to preselect.
        disable_guild_select: :class:`bool`
            Whether to stop the user from picking another guild.
        """
        scope = self.scopes.serialize(scopes)
        if not scope:
            return ValidationError(NO_VALID_BOT_SCOPES)
        if permissions <= 0:
            return ValidationError(PERMISSIONS_REQUIRED)
        return urls.bot_authorize_url(self.application.client_id, scope, permissions, guild_id, disable_guild_select)

    def webhook_authorize_url(self, state: str = "", redirect_uri: str = "") -> str:
        """Gets the URL that creates an incoming webhook.

        Exchange the returned code with :meth:`exchange_code`; the token
        payload then holds ``webhook.id`` and ``webhook.token``.
        """
        application = self.application
        return urls.webhook_authorize_url(application.client_id, redirect_uri or application.redirect_uri, state)

    def webhook_authorize_link(self, text: str = "Add webhook", state: str = "", redirect_uri: str = "") -> str:
        return _anchor(self.webhook_authorize_url(state, redirect_uri), text)

    # Token endpoint

    async def exchange_code(self, code: str, redirect_uri: str = "") -> ApiResult:
        """Gets an access token using an authorization code

        Parameters
        -----------
        code: :class:`str`
            The authorization code from OAuth2 redirect
        redirect_uri: :class:`str`
            The redirect used for the authorization. Defaults to the
            configured one.
        """
        form = {
            "grant_type": "authorization_code",
            **self._credentials_form(),
            "redirect_uri": redirect_uri or self.application.redirect_uri,
            "code": code,
        }
        return await self.http.execute(RequestSpec("POST", urls.token_url(self.api_base), form=form))

    async def refresh_token(self, scopes: ScopesLike, refresh_token: str) -> ApiResult:
        """Refreshes an access token using a refresh token

        Parameters
        -----------
        scopes: Union[:class:`str`, List[:class:`str`]]
            The scopes the token was granted.
        refresh_token: :class:`str`
            The refresh token to use
        """
        form = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            **self._credentials_form(redirect_uri=self.application.redirect_uri),
            "scope": self.scopes.form(scopes),
        }
        return await self.http.execute(RequestSpec("POST", urls.token_url(self.api_base), form=form))

    async def revoke_token(self, token: str) -> None:
        """Revokes an access token or refresh token

        Discord answers with an empty body, so the outcome is not reported.
        Transport errors still raise.

        Parameters
        -----------
        token: :class:`str`
            The token to revoke
        """
        form = self._credentials_form(token=token)
        result = await self.http.execute(RequestSpec("POST", urls.revoke_url(self.api_base), form=form))
        _log.debug("Token revocation returned status %s.", result.status)

    async def check_token(self, token: Optional[str] = None) -> ApiResult:
        """Gets information about a user access token

        Parameters
        -----------
        token: Optional[:class:`str`]
            The token to inspect. Defaults to the stored user token.
        """
        if token is None:
            spec = RequestSpec("GET", urls.token_info_url(self.api_base), auth=AuthMode.user)
        else:
            spec = RequestSpec("GET", urls.token_info_url(self.api_base), auth=AuthMode.explicit, token=token)
        return await self.http.execute(spec)

    async def client_credentials_grant(self, scopes: ScopesLike) -> ApiResult:
        """Gets a token for the application owner. Meant for testing.

        The token payload has no refresh token.
        """
        form = {
            "grant_type": "client_credentials",
            **self._credentials_form(redirect_uri=self.application.redirect_uri),
            "scope": self.scopes.form(scopes),
        }
        return await self.http.execute(RequestSpec("POST", urls.token_url(self.api_base), form=form))
