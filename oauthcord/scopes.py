# SPDX-License-Identifier: MIT

"""
oauthcord.scopes
~~~~~~~~~~~~~~~~

Validation and serialization of OAuth2 scopes.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple, Union

from .errors import InvalidArgument

__all__ = (
    "OAuth2Scope",
    "VALID_SCOPES",
    "SCOPE_SEPARATOR",
    "ScopeValidator",
)

_log = logging.getLogger(__name__)

#: Scopes joined for embedding in an authorize URL.
SCOPE_SEPARATOR = "%20"

ScopesLike = Union[str, Sequence[str]]


class OAuth2Scope:
    """OAuth2 scopes that can be requested"""
    ACTIVITIES_READ = "activities.read"
    ACTIVITIES_WRITE = "activities.write"
    APPLICATIONS_BUILDS_READ = "applications.builds.read"
    APPLICATIONS_BUILDS_UPLOAD = "applications.builds.upload"
    APPLICATIONS_COMMANDS = "applications.commands"
    APPLICATIONS_COMMANDS_UPDATE = "applications.commands.update"
    APPLICATIONS_COMMANDS_PERMISSIONS_UPDATE = "applications.commands.permissions.update"
    APPLICATIONS_ENTITLEMENTS = "applications.entitlements"
    APPLICATIONS_STORE_UPDATE = "applications.store.update"
    BOT = "bot"
    CONNECTIONS = "connections"
    DM_CHANNELS_READ = "dm_channels.read"
    EMAIL = "email"
    GDM_JOIN = "gdm.join"
    GUILDS = "guilds"
    GUILDS_JOIN = "guilds.join"
    GUILDS_MEMBERS_READ = "guilds.members.read"
    IDENTIFY = "identify"
    MESSAGES_READ = "messages.read"
    RELATIONSHIPS_READ = "relationships.read"
    ROLE_CONNECTIONS_WRITE = "role_connections.write"
    RPC = "rpc"
    RPC_API = "rpc.api"
    RPC_ACTIVITIES_WRITE = "rpc.activities.write"
    RPC_NOTIFICATIONS_READ = "rpc.notifications.read"
    RPC_VOICE_READ = "rpc.voice.read"
    RPC_VOICE_WRITE = "rpc.voice.write"
    VOICE = "voice"
    WEBHOOK_INCOMING = "webhook.incoming"


# Some of these require the application to be allow-listed by Discord.
VALID_SCOPES: Tuple[str, ...] = (
    OAuth2Scope.BOT,
    OAuth2Scope.CONNECTIONS,
    OAuth2Scope.EMAIL,
    OAuth2Scope.IDENTIFY,
    OAuth2Scope.GUILDS,
    OAuth2Scope.GUILDS_JOIN,
    OAuth2Scope.GDM_JOIN,
    OAuth2Scope.MESSAGES_READ,
    OAuth2Scope.RPC,
    OAuth2Scope.RPC_API,
    OAuth2Scope.RPC_NOTIFICATIONS_READ,
    OAuth2Scope.WEBHOOK_INCOMING,
    OAuth2Scope.APPLICATIONS_BUILDS_UPLOAD,
    OAuth2Scope.APPLICATIONS_BUILDS_READ,
    OAuth2Scope.APPLICATIONS_STORE_UPDATE,
    OAuth2Scope.APPLICATIONS_ENTITLEMENTS,
    OAuth2Scope.RELATIONSHIPS_READ,
    OAuth2Scope.ACTIVITIES_READ,
    OAuth2Scope.ACTIVITIES_WRITE,
    OAuth2Scope.APPLICATIONS_COMMANDS,
    OAuth2Scope.APPLICATIONS_COMMANDS_UPDATE,
    OAuth2Scope.APPLICATIONS_COMMANDS_PERMISSIONS_UPDATE,
    OAuth2Scope.DM_CHANNELS_READ,
    OAuth2Scope.GUILDS_MEMBERS_READ,
    OAuth2Scope.ROLE_CONNECTIONS_WRITE,
    OAuth2Scope.RPC_ACTIVITIES_WRITE,
    OAuth2Scope.RPC_VOICE_READ,
    OAuth2Scope.RPC_VOICE_WRITE,
    OAuth2Scope.VOICE,
)


class ScopeValidator:
    """Validates requested scopes against the known scope catalog.

    Invalid scopes are never an error: they are dropped and the surviving
    scopes keep their input order. An empty result means nothing valid was
    requested, and callers must check for it.

    Parameters
    -----------
    valid_scopes: Iterable[:class:`str`]
        The catalog to validate against. Defaults to :data:`VALID_SCOPES`.
    """

    __slots__ = ("_valid",)

    def __init__(self, valid_scopes: Iterable[str] = VALID_SCOPES) -> None:
        self._valid: Tuple[str, ...] = tuple(valid_scopes)

    def is_valid(self, scope: str) -> bool:
        """Whether ``scope`` is in the catalog."""
        return scope in self._valid

    def list_valid(self) -> str:
        """The catalog as a single comma separated string."""
        return ", ".join(self._valid)

    def filter(self, scopes: ScopesLike) -> Tuple[str, ...]:
        """Returns the valid scopes of ``scopes`` in order.

        Parameters
        -----------
        scopes: Union[:class:`str`, Sequence[:class:`str`]]
            Either a comma separated string or a sequence of scope names.

        Raises
        -------
        InvalidArgument
            ``scopes`` is neither a string nor a sequence of strings.
        """
        if isinstance(scopes, str):
            candidates = [part.strip() for part in scopes.split(",")]
        elif isinstance(scopes, (list, tuple)):
            candidates = list(scopes)
        else:
            raise InvalidArgument(f"scopes must be a str or a sequence of str, not {scopes.__class__.__name__}")

        kept = tuple(scope for scope in candidates if self.is_valid(scope))
        if len(kept) != len(candidates):
            _log.debug("Dropped invalid scopes from %r.", scopes)
        return kept

    def serialize(self, scopes: ScopesLike) -> str:
        """Joins the valid scopes with ``%20`` for use in an authorize URL."""
        return SCOPE_SEPARATOR.join(self.filter(scopes))

    def form(self, scopes: ScopesLike) -> str:
        """Joins the valid scopes with a plain space, as sent in form bodies."""
        return self.serialize(scopes).replace(SCOPE_SEPARATOR, " ")
