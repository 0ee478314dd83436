# SPDX-License-Identifier: MIT

"""
oauthcord.urls
~~~~~~~~~~~~~~

URL composition for the OAuth2 and REST endpoints.

Resource paths follow the platform's "optional path part" convention: a
segment whose value is ``0``, ``""``, ``False`` or ``None`` is left out of the
URL entirely, so ``resource_url("users")`` and ``resource_url("users", 0)``
both address ``/users``.

Scope strings handed to these functions must already be serialized by
:class:`~oauthcord.scopes.ScopeValidator`; they are embedded as-is.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import string
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote as _uriquote

from .errors import InvalidArgument
from .types.snowflake import Snowflake
from .utils import is_zero

__all__ = (
    "DISCORD_API_URL",
    "AUTHORIZE_URL",
    "QueryParams",
    "encode_query",
    "resource_url",
    "path_placeholders",
    "expand_path",
    "authorize_url",
    "implicit_grant_url",
    "bot_authorize_url",
    "webhook_authorize_url",
    "token_url",
    "revoke_url",
    "token_info_url",
    "application_url",
)

DISCORD_API_URL = "https://discord.com/api/v10"
AUTHORIZE_URL = "https://discord.com/oauth2/authorize"

QueryParams = Union[Sequence[Tuple[str, Any]], Mapping[str, Any]]

_formatter = string.Formatter()


def _quote(value: Any) -> str:
    return _uriquote(str(value), safe="")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return _quote(value)


def encode_query(query: Optional[QueryParams]) -> str:
    """Encodes ordered ``(name, value)`` pairs. Pairs whose value is ``None`` are skipped."""
    if not query:
        return ""
    pairs = query.items() if isinstance(query, Mapping) else query
    return "&".join(f"{_quote(name)}={_query_value(value)}" for name, value in pairs if value is not None)


def _with_query(url: str, query: Optional[QueryParams]) -> str:
    encoded = encode_query(query)
    if encoded:
        return f"{url}?{encoded}"
    return url


def resource_url(
    collection: str,
    id: Union[Snowflake, str, None] = 0,
    subpath: str = "",
    query: Optional[QueryParams] = None,
    *,
    base: str = DISCORD_API_URL,
) -> str:
    """Builds ``base/collection/id/subpath?query``.

    Parameters
    -----------
    collection: :class:`str`
        The resource collection, e.g. ``"guilds"``. May itself contain slashes.
    id: Union[:class:`int`, :class:`str`]
        The resource id. Omitted when zero-equivalent.
    subpath: :class:`str`
        A path below the resource, e.g. ``"channels"``. Omitted when empty.
    query: Optional[Sequence[Tuple[:class:`str`, Any]]]
        Ordered query parameters.
    base: :class:`str`
        The API root.
    """
    parts: List[str] = [base.rstrip("/"), collection.strip("/")]
    if not is_zero(id):
        parts.append(str(id))
    if not is_zero(subpath):
        parts.append(subpath.strip("/"))
    return _with_query("/".join(parts), query)


def _segment_names(segment: str) -> List[str]:
    return [name for _, name, _, _ in _formatter.parse(segment) if name]


def path_placeholders(template: str) -> List[str]:
    """The ``{name}`` placeholders of a path template, in order."""
    return [name for segment in template.strip("/").split("/") for name in _segment_names(segment)]


def expand_path(template: str, params: Mapping[str, Any]) -> str:
    """Fills the ``{name}`` placeholders of a path template.

    Trailing segments holding a placeholder whose value is zero-equivalent or
    not given at all are dropped, e.g. ``guilds/{guild_id}/bans/{user_id}``
    with only ``guild_id=1`` becomes ``guilds/1/bans``.

    Raises
    -------
    InvalidArgument
        A placeholder followed by further segments is zero-equivalent.
    """
    segments = template.strip("/").split("/")
    while segments:
        names = _segment_names(segments[-1])
        if not names or not any(is_zero(params.get(name)) for name in names):
            break
        segments.pop()

    expanded: List[str] = []
    for segment in segments:
        names = _segment_names(segment)
        for name in names:
            if is_zero(params.get(name)):
                raise InvalidArgument(f"{name} is required for {template}")
        expanded.append(segment.format_map({name: _quote(params[name]) for name in names}))
    return "/".join(expanded)


def authorize_url(client_id: Snowflake, redirect_uri: str, scope: str, state: str = "") -> str:
    """The authorization-code flow URL."""
    url = f"{AUTHORIZE_URL}?client_id={client_id}&redirect_uri={_quote(redirect_uri)}&response_type=code&scope={scope}"
    if state:
        url += f"&state={_quote(state)}"
    return url


def implicit_grant_url(client_id: Snowflake, scope: str, state: str = "") -> str:
    """The implicit grant URL. The token arrives in the redirect's URL fragment."""
    url = f"{AUTHORIZE_URL}?response_type=token&client_id={client_id}"
    if state:
        url += f"&state={_quote(state)}"
    return f"{url}&scope={scope}"


def bot_authorize_url(
    client_id: Snowflake,
    scope: str,
    permissions: int,
    guild_id: Optional[Snowflake] = 0,
    disable_guild_select: bool = False,
) -> str:
    url = f"{AUTHORIZE_URL}?client_id={client_id}&scope={scope}&permissions={permissions}"
    if not is_zero(guild_id):
        url += f"&guild_id={guild_id}"
    if disable_guild_select:
        url += "&disable_guild_select=true"
    return url


def webhook_authorize_url(client_id: Snowflake, redirect_uri: str, state: str = "") -> str:
    url = f"{AUTHORIZE_URL}?response_type=code&client_id={client_id}&scope=webhook.incoming"
    if state:
        url += f"&state={_quote(state)}"
    return f"{url}&redirect_uri={_quote(redirect_uri)}"


def token_url(base: str = DISCORD_API_URL) -> str:
    return resource_url("oauth2", "token", base=base)


def revoke_url(base: str = DISCORD_API_URL) -> str:
    return resource_url("oauth2", "token", "revoke", base=base)


def token_info_url(base: str = DISCORD_API_URL) -> str:
    return resource_url("oauth2", "@me", base=base)


def application_url(base: str = DISCORD_API_URL) -> str:
    return resource_url("oauth2/applications", "@me", base=base)
