# SPDX-License-Identifier: MIT

"""
oauthcord.client
~~~~~~~~~~~~~~~~

The entry point tying the credential store, the dispatcher, the OAuth2 flows
and the resource catalog together.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING, Optional, Type

from aiohttp import BaseConnector, BasicAuth

from . import urls
from .config import ClientConfig
from .credentials import ApplicationCredential, CredentialStore
from .http import AiohttpTransport, HTTPClient, Transport
from .oauth2 import OAuth2Client, OAuth2Session, OAuth2Token
from .resources import ResourceClient
from .scopes import ScopeValidator

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = (
    "Client",
)

_log = logging.getLogger(__name__)


class Client:
    """Represents a connection to Discord's REST and OAuth2 API.

    Parameters
    -----------
    client_id: :class:`int`
        The client ID provided by Discord
    client_secret: :class:`str`
        The client secret provided by Discord
    redirect_uri: :class:`str`
        The default redirect URI for the OAuth2 flows
    bot_token: :class:`str`
        The token of the application's bot.
    transport: Optional[:class:`~oauthcord.http.Transport`]
        The transport to send requests through. Defaults to an
        :class:`~oauthcord.http.AiohttpTransport` built from ``connector``,
        ``proxy`` and ``proxy_auth``.
    connector: Optional[:class:`aiohttp.BaseConnector`]
        The connector to use for the client session.
    proxy: Optional[:class:`str`]
        Optional proxy URL to use for requests.
    proxy_auth: Optional[:class:`aiohttp.BasicAuth`]
        Optional proxy authentication.
    api_base: :class:`str`
        The API root.

    Attributes
    -----------
    credentials: :class:`~oauthcord.credentials.CredentialStore`
        The credentials requests are signed with.
    http: :class:`~oauthcord.http.HTTPClient`
        The request dispatcher.
    oauth2: :class:`~oauthcord.oauth2.OAuth2Client`
        The OAuth2 flows.
    resources: :class:`~oauthcord.resources.ResourceClient`
        The REST resources.
    """

    def __init__(
        self,
        client_id: int,
        client_secret: str,
        redirect_uri: str,
        bot_token: str,
        *,
        transport: Optional[Transport] = None,
        connector: Optional[BaseConnector] = None,
        proxy: Optional[str] = None,
        proxy_auth: Optional[BasicAuth] = None,
        api_base: str = urls.DISCORD_API_URL,
    ) -> None:
        self.api_base: str = api_base
        self.credentials: CredentialStore = CredentialStore(
            ApplicationCredential(client_id, client_secret, redirect_uri), bot_token
        )
        if transport is None:
            transport = AiohttpTransport(connector=connector, proxy=proxy, proxy_auth=proxy_auth)
        self.http: HTTPClient = HTTPClient(self.credentials, transport)
        self.oauth2: OAuth2Client = OAuth2Client(self.http, scopes=ScopeValidator(), api_base=api_base)
        self.resources: ResourceClient = ResourceClient(self.http, api_base=api_base)
        _log.debug("Client created for application %s.", client_id)

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> Client:
        return cls(
            config.client_id,
            config.client_secret,
            config.redirect_uri,
            config.bot_token,
            api_base=config.api_base,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> Client:
        """Creates a client from the ``DISCORD_*`` environment variables. See :meth:`ClientConfig.from_env`."""
        return cls.from_config(ClientConfig.from_env(), **kwargs)

    def __repr__(self) -> str:
        return f"<Client application={self.credentials.application!r}>"

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Closes the underlying transport."""
        await self.http.close()

    def set_access_token(self, access_token: str) -> None:
        """Sets the user token used by requests signed as the user.

        This token is shared by every call on this client. Use
        :meth:`session` for requests made on behalf of several users.
        """
        self.credentials.set_access_token(access_token)

    def is_valid_scope(self, scope: str) -> bool:
        return self.oauth2.scopes.is_valid(scope)

    def list_valid_scopes(self) -> str:
        return self.oauth2.scopes.list_valid()

    def session(self, token: Optional[OAuth2Token] = None) -> OAuth2Session:
        """Creates a session with its own user token, sharing this client's transport."""
        return OAuth2Session(self, token)
