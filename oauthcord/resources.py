# SPDX-License-Identifier: MIT

"""
oauthcord.resources
~~~~~~~~~~~~~~~~~~~

Generic REST verbs and the catalog of endpoints built on them.

Every endpoint is a row of :data:`CATALOG`; :meth:`ResourceClient.call`
expands its path template, checks required body keys and dispatches it.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from . import urls
from .credentials import AuthMode
from .errors import InvalidArgument, UnknownEndpoint
from .http import HTTPClient, RequestSpec
from .result import ApiResult, ValidationError
from .types.snowflake import Snowflake
from .urls import QueryParams

__all__ = (
    "Endpoint",
    "CATALOG",
    "ResourceClient",
)

_log = logging.getLogger(__name__)

MESSAGE_ANCHORS = ("after", "before", "around")


@dataclass(frozen=True)
class Endpoint:
    """A catalog row.

    Attributes
    ----------
    name: :class:`str`
        The name passed to :meth:`ResourceClient.call`.
    method: :class:`str`
        The HTTP verb.
    path: :class:`str`
        The path template below the API root, e.g. ``guilds/{guild_id}/roles``.
    auth: :class:`~oauthcord.credentials.AuthMode`
        The credential used unless the call passes a token or another mode.
    required: Tuple[:class:`str`, ...]
        Keys the body must contain.
    query: Tuple[:class:`str`, ...]
        Call parameters sent as query string, in this order.
    error: Optional[:class:`str`]
        The message returned when a required key is missing.
    """

    name: str
    method: str
    path: str
    auth: AuthMode = AuthMode.service
    required: Tuple[str, ...] = ()
    query: Tuple[str, ...] = ()
    error: Optional[str] = None

    def missing_message(self) -> str:
        if self.error:
            return self.error
        keys = " and ".join(self.required)
        return f"The key {keys} is required for {self.name.replace('_', ' ')}."


_user = AuthMode.user
_service = AuthMode.service

CATALOG: Dict[str, Endpoint] = {
    endpoint.name: endpoint
    for endpoint in (
        # users
        Endpoint("get_current_user", "GET", "users/@me", _user),
        Endpoint("get_user", "GET", "users/{user_id}"),
        Endpoint("get_user_guilds", "GET", "users/@me/guilds", _user),
        Endpoint("get_user_connections", "GET", "users/@me/connections", _user),
        Endpoint("get_user_guild_member", "GET", "users/@me/guilds/{guild_id}/member", _user),
        # guilds
        Endpoint("get_guild", "GET", "guilds/{guild_id}", query=("with_counts",)),
        Endpoint(
            "create_guild", "POST", "guilds",
            required=("name",), error="The key name is required for creating a guild.",
        ),
        Endpoint("get_guild_preview", "GET", "guilds/{guild_id}/preview"),
        Endpoint("get_guild_channels", "GET", "guilds/{guild_id}/channels"),
        Endpoint(
            "create_guild_channel", "POST", "guilds/{guild_id}/channels",
            required=("name",), error="The key name is required to be present for creating a guild channel.",
        ),
        Endpoint("get_guild_member", "GET", "guilds/{guild_id}/members/{user_id}"),
        Endpoint("list_guild_members", "GET", "guilds/{guild_id}/members", query=("limit", "after")),
        Endpoint(
            "add_guild_member", "PUT", "guilds/{guild_id}/members/{user_id}",
            required=("access_token",), error="The key access_token is required for adding a guild member.",
        ),
        Endpoint("get_guild_bans", "GET", "guilds/{guild_id}/bans", _user),
        Endpoint("get_guild_ban", "GET", "guilds/{guild_id}/bans/{user_id}", _user),
        Endpoint("get_guild_roles", "GET", "guilds/{guild_id}/roles"),
        Endpoint(
            "create_guild_role", "POST", "guilds/{guild_id}/roles",
            required=("name",), error="The key name is required for creating a guild role.",
        ),
        Endpoint("add_member_role", "PUT", "guilds/{guild_id}/members/{user_id}/roles/{role_id}"),
        Endpoint("remove_member_role", "DELETE", "guilds/{guild_id}/members/{user_id}/roles/{role_id}"),
        Endpoint("get_guild_invites", "GET", "guilds/{guild_id}/invites", _user),
        Endpoint("get_guild_integrations", "GET", "guilds/{guild_id}/integrations", _user),
        Endpoint(
            "create_guild_integration", "POST", "guilds/{guild_id}/integrations",
            required=("type", "id"), error="Create a guild integration requires the keys type and id.",
        ),
        Endpoint("get_guild_widget", "GET", "guilds/{guild_id}/widget", _user),
        Endpoint("get_guild_widget_image", "GET", "guilds/{guild_id}/widget.png", query=("style",)),
        Endpoint("get_guild_vanity_url", "GET", "guilds/{guild_id}/vanity-url", _user),
        # channels
        Endpoint("get_channel", "GET", "channels/{channel_id}"),
        Endpoint("get_channel_messages", "GET", "channels/{channel_id}/messages", query=("limit", "around", "before", "after")),
        Endpoint("get_channel_invites", "GET", "channels/{channel_id}/invites", _user),
        Endpoint("create_channel_invite", "POST", "channels/{channel_id}/invites"),
        Endpoint("get_channel_pins", "GET", "channels/{channel_id}/pins"),
        # webhooks and the application itself
        Endpoint("execute_webhook", "POST", "webhooks/{webhook_id}/{webhook_token}", AuthMode.none),
        Endpoint("get_current_application", "GET", "oauth2/applications/@me"),
    )
}


class ResourceClient:
    """REST access to the resource collections.

    The verbs default to the credential the platform expects for them: user
    bearer for reads, the service token for writes. Every method accepts
    ``token=`` to send a user token explicitly instead of the stored one.

    Parameters
    -----------
    http: :class:`~oauthcord.http.HTTPClient`
        The dispatcher to send requests with.
    api_base: :class:`str`
        The API root.
    catalog: Mapping[:class:`str`, :class:`Endpoint`]
        The endpoints known to :meth:`call`.
    """

    def __init__(
        self,
        http: HTTPClient,
        *,
        api_base: str = urls.DISCORD_API_URL,
        catalog: Mapping[str, Endpoint] = CATALOG,
    ) -> None:
        self.http: HTTPClient = http
        self.api_base: str = api_base
        self.catalog: Mapping[str, Endpoint] = catalog

    @staticmethod
    def _auth(auth: AuthMode, token: Optional[str]) -> Tuple[AuthMode, Optional[str]]:
        if token is not None:
            return AuthMode.explicit, token
        return auth, None

    def url(
        self,
        collection: str,
        id: Union[Snowflake, str, None] = 0,
        subpath: str = "",
        query: Optional[QueryParams] = None,
    ) -> str:
        return urls.resource_url(collection, id, subpath, query, base=self.api_base)

    async def fetch(
        self,
        collection: str,
        id: Union[Snowflake, str, None] = 0,
        subpath: str = "",
        query: Optional[QueryParams] = None,
        auth: AuthMode = AuthMode.user,
        *,
        token: Optional[str] = None,
    ) -> ApiResult:
        """GETs ``collection/id/subpath``.

        Parameters
        -----------
        collection: :class:`str`
            The collection, e.g. ``"guilds"``.
        id: Union[:class:`int`, :class:`str`]
            The resource id; left out of the URL when ``0`` or empty.
        subpath: :class:`str`
            The path below the resource.
        query: Optional[Sequence[Tuple[:class:`str`, Any]]]
            Ordered query parameters.
        auth: :class:`~oauthcord.credentials.AuthMode`
            The credential to sign with.
        token: Optional[:class:`str`]
            A user token to send instead of the stored one.
        """
        mode, explicit = self._auth(auth, token)
        spec = RequestSpec("GET", self.url(collection, id, subpath, query), auth=mode, token=explicit)
        return await self.http.execute(spec)

    async def create(
        self,
        collection: str,
        id: Union[Snowflake, str, None] = 0,
        subpath: str = "",
        body: Optional[Mapping[str, Any]] = None,
        auth: AuthMode = AuthMode.service,
        *,
        required: Sequence[str] = (),
        error: Optional[str] = None,
        token: Optional[str] = None,
    ) -> Union[ApiResult, ValidationError]:
        """POSTs ``body`` as JSON to ``collection/id/subpath``.

        If any key in ``required`` is missing from ``body`` a
        :class:`~oauthcord.result.ValidationError` is returned and nothing
        is sent.
        """
        body = dict(body or {})
        missing = [key for key in required if key not in body]
        if missing:
            message = error or f"The key {' and '.join(missing)} is required."
            _log.debug("Refusing POST to %s/%s: missing %s.", collection, subpath, missing)
            return ValidationError(message)

        mode, explicit = self._auth(auth, token)
        spec = RequestSpec("POST", self.url(collection, id, subpath), auth=mode, token=explicit, json=body)
        return await self.http.execute(spec)

    async def put(
        self,
        url: str,
        body: Optional[Mapping[str, Any]] = None,
        auth: AuthMode = AuthMode.service,
        *,
        token: Optional[str] = None,
    ) -> ApiResult:
        """PUTs to a full URL. The result carries :class:`~oauthcord.result.Diagnostics`."""
        mode, explicit = self._auth(auth, token)
        spec = RequestSpec(
            "PUT", url, auth=mode, token=explicit, json=dict(body) if body is not None else None, diagnostics=True
        )
        return await self.http.execute(spec)

    async def delete(self, url: str, auth: AuthMode = AuthMode.service, *, token: Optional[str] = None) -> ApiResult:
        """DELETEs a full URL. The result carries :class:`~oauthcord.result.Diagnostics`."""
        mode, explicit = self._auth(auth, token)
        return await self.http.execute(RequestSpec("DELETE", url, auth=mode, token=explicit, diagnostics=True))

    async def call(
        self,
        name: str,
        body: Optional[Mapping[str, Any]] = None,
        *,
        auth: Optional[AuthMode] = None,
        token: Optional[str] = None,
        **params: Any,
    ) -> Union[ApiResult, ValidationError]:
        """Runs a catalog endpoint.

        Parameters
        -----------
        name: :class:`str`
            The endpoint name, e.g. ``"get_guild_roles"``.
        body: Optional[Mapping[:class:`str`, Any]]
            The JSON body for POST and PUT endpoints.
        auth: Optional[:class:`~oauthcord.credentials.AuthMode`]
            Overrides the endpoint's credential.
        token: Optional[:class:`str`]
            A user token to send instead of the stored one.
        \\*\\*params
            Path placeholders and query parameters. A zero-equivalent
            placeholder is only allowed at the end of the path, where it is
            left out; anywhere else a :class:`~oauthcord.result.ValidationError`
            is returned and nothing is sent.

        Raises
        -------
        UnknownEndpoint
            ``name`` is not in the catalog.
        InvalidArgument
            ``params`` holds a key that is neither a placeholder nor a query
            parameter of the endpoint.
        """
        try:
            endpoint = self.catalog[name]
        except KeyError:
            raise UnknownEndpoint(name) from None

        known = set(urls.path_placeholders(endpoint.path)) | set(endpoint.query)
        unknown = sorted(key for key in params if key not in known)
        if unknown:
            raise InvalidArgument(f"{name} does not take {', '.join(unknown)}")

        try:
            path = urls.expand_path(endpoint.path, params)
        except InvalidArgument as exc:
            _log.debug("Refusing %s: %s.", name, exc)
            return ValidationError(str(exc))
        query = [(key, params.get(key)) for key in endpoint.query]
        mode = auth if auth is not None else endpoint.auth

        if endpoint.method == "GET":
            return await self.fetch(path, query=query, auth=mode, token=token)
        if endpoint.method == "POST":
            return await self.create(
                path, body=body, auth=mode, required=endpoint.required, error=endpoint.missing_message(), token=token
            )

        if endpoint.required and not all(key in (body or {}) for key in endpoint.required):
            return ValidationError(endpoint.missing_message())
        url = self.url(path, query=query)
        if endpoint.method == "PUT":
            return await self.put(url, body, mode, token=token)
        return await self.delete(url, mode, token=token)

    # Endpoints that need more than a catalog row

    async def get_channel_messages(
        self,
        channel_id: Snowflake,
        anchor: str = "around",
        anchor_id: Snowflake = 0,
        limit: int = 50,
        *,
        token: Optional[str] = None,
    ) -> Union[ApiResult, ValidationError]:
        """Gets messages of a channel.

        Needs the ``VIEW_CHANNEL`` permission in guild channels, and
        ``READ_MESSAGE_HISTORY`` or no messages are returned.

        Parameters
        -----------
        channel_id: :class:`Snowflake`
            The channel.
        anchor: :class:`str`
            One of ``after``, ``before``, ``around``, or empty for none.
        anchor_id: :class:`Snowflake`
            The message id the anchor refers to. No anchor is sent when ``0``.
        limit: :class:`int`
            The number of messages to return.
        """
        if anchor and anchor not in MESSAGE_ANCHORS:
            return ValidationError("anchor must be one of after, before, or around.")
        params: Dict[str, Any] = {"channel_id": channel_id, "limit": limit}
        if anchor and anchor_id:
            params[anchor] = anchor_id
        return await self.call("get_channel_messages", token=token, **params)

    async def add_member_role(
        self, guild_id: Snowflake, user_id: Snowflake, role_id: Snowflake
    ) -> Union[ApiResult, ValidationError]:
        """Gives a member a role. Check ``result.status`` for ``204``."""
        return await self.call("add_member_role", guild_id=guild_id, user_id=user_id, role_id=role_id)

    async def remove_member_role(
        self, guild_id: Snowflake, user_id: Snowflake, role_id: Snowflake
    ) -> Union[ApiResult, ValidationError]:
        """Takes a role from a member. Check ``result.status`` for ``204``."""
        return await self.call("remove_member_role", guild_id=guild_id, user_id=user_id, role_id=role_id)

    async def execute_webhook(
        self, webhook_id: Snowflake, webhook_token: str, body: Optional[Mapping[str, Any]] = None
    ) -> Union[ApiResult, ValidationError]:
        """Posts a message through a webhook obtained from the webhook authorization flow."""
        return await self.call("execute_webhook", body, webhook_id=webhook_id, webhook_token=webhook_token)
