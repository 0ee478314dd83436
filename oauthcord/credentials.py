# SPDX-License-Identifier: MIT

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

__all__ = (
    "AuthMode",
    "ApplicationCredential",
    "CredentialStore",
)


class AuthMode(enum.Enum):
    """Which credential a request is sent with."""

    none = "none"
    user = "user"
    service = "service"
    explicit = "explicit"


@dataclass(frozen=True)
class ApplicationCredential:
    """The registered client id, secret and redirect uri of the application."""

    client_id: Union[int, str]
    client_secret: str
    redirect_uri: str

    def __repr__(self) -> str:
        return f"<ApplicationCredential client_id={self.client_id!r} redirect_uri={self.redirect_uri!r}>"


class CredentialStore:
    """Holds the credentials a :class:`~oauthcord.http.HTTPClient` signs requests with.

    The application credential and the service (bot) token are fixed at
    construction. The user access token can be changed at any time and is
    shared by every request dispatched through this store, so calls made for
    different users must either use separate stores (see :meth:`fork`) or
    pass their token explicitly.

    Parameters
    -----------
    application: :class:`ApplicationCredential`
        The application's client id, secret and default redirect uri.
    service_token: :class:`str`
        The bot token of the application.
    access_token: :class:`str`
        An initial user access token. Empty until a token exchange succeeds.
    """

    __slots__ = ("_application", "_service_token", "_access_token")

    def __init__(self, application: ApplicationCredential, service_token: str, access_token: str = "") -> None:
        self._application = application
        self._service_token = service_token
        self._access_token = access_token

    def __repr__(self) -> str:
        return f"<CredentialStore application={self._application!r} has_access_token={bool(self._access_token)}>"

    @property
    def application(self) -> ApplicationCredential:
        return self._application

    @property
    def service_token(self) -> str:
        return self._service_token

    @property
    def access_token(self) -> str:
        return self._access_token

    def set_access_token(self, access_token: str) -> None:
        self._access_token = access_token

    def fork(self, access_token: str = "") -> CredentialStore:
        """Returns a new store sharing the application credential and service token
        but with its own user access token."""
        return self.__class__(self._application, self._service_token, access_token)

    def authorization(self, mode: AuthMode, token: Optional[str] = None) -> Optional[str]:
        """Builds the ``Authorization`` header value for ``mode``.

        A missing user token is not checked here; the request goes out with
        ``"Bearer "`` and the platform answers with its own error.

        Parameters
        -----------
        mode: :class:`AuthMode`
            The credential to use.
        token: Optional[:class:`str`]
            The token for :attr:`AuthMode.explicit`.
        """
        if mode is AuthMode.none:
            return None
        if mode is AuthMode.user:
            return f"Bearer {self._access_token or ''}"
        if mode is AuthMode.service:
            return f"Bot {self._service_token}"
        return f"Bearer {token or ''}"
