# SPDX-License-Identifier: MIT

"""
oauthcord.http
~~~~~~~~~~~~~~

The request dispatcher and the aiohttp transport it sends through.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable
from urllib.parse import urlencode

import aiohttp

from . import __version__, utils
from .credentials import AuthMode, CredentialStore
from .result import INVALID_RESPONSE, ApiResult, Diagnostics, Failure, Success

__all__ = (
    "RequestSpec",
    "TransportResponse",
    "Transport",
    "AiohttpTransport",
    "HTTPClient",
)

_log = logging.getLogger(__name__)


@dataclass
class RequestSpec:
    """A single request to dispatch.

    Parameters
    -----------
    method: :class:`str`
        ``GET``, ``POST``, ``PUT`` or ``DELETE``.
    url: :class:`str`
        The full URL.
    auth: :class:`~oauthcord.credentials.AuthMode`
        The credential to sign with.
    token: Optional[:class:`str`]
        The bearer token for :attr:`AuthMode.explicit`.
    json: Any
        A body sent as JSON.
    form: Optional[Mapping[:class:`str`, Any]]
        A body sent form-encoded. Used by the OAuth2 token endpoints.
    diagnostics: :class:`bool`
        Whether to attach :class:`~oauthcord.result.Diagnostics` to the result.
    """

    method: str
    url: str
    auth: AuthMode = AuthMode.none
    token: Optional[str] = None
    json: Any = None
    form: Optional[Mapping[str, Any]] = None
    diagnostics: bool = False

    def __post_init__(self) -> None:
        self.method = self.method.upper()


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    elapsed: float = 0.0


@runtime_checkable
class Transport(Protocol):
    """What the dispatcher needs from an HTTP implementation.

    Network failures must be raised, not returned.
    """

    async def perform(
        self, method: str, url: str, headers: Mapping[str, str], body: Optional[bytes] = None
    ) -> TransportResponse:
        ...

    async def close(self) -> None:
        ...


class AiohttpTransport:
    """A :class:`Transport` backed by an :class:`aiohttp.ClientSession`.

    The session is created on first use.

    Parameters
    -----------
    connector: Optional[:class:`aiohttp.BaseConnector`]
        The connector to use for the client session.
    proxy: Optional[:class:`str`]
        Optional proxy URL to use for requests.
    proxy_auth: Optional[:class:`aiohttp.BasicAuth`]
        Optional proxy authentication.
    session: Optional[:class:`aiohttp.ClientSession`]
        An existing session to use. It is not closed by :meth:`close`.
    """

    def __init__(
        self,
        *,
        connector: Optional[aiohttp.BaseConnector] = None,
        proxy: Optional[str] = None,
        proxy_auth: Optional[aiohttp.BasicAuth] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.connector: Optional[aiohttp.BaseConnector] = connector
        self.proxy: Optional[str] = proxy
        self.proxy_auth: Optional[aiohttp.BasicAuth] = proxy_auth
        self.__session: Optional[aiohttp.ClientSession] = session
        self._owns_session: bool = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self.__session is None or self.__session.closed:
            self.__session = aiohttp.ClientSession(connector=self.connector)
            self._owns_session = True
        return self.__session

    async def perform(
        self, method: str, url: str, headers: Mapping[str, str], body: Optional[bytes] = None
    ) -> TransportResponse:
        kwargs: Dict[str, Any] = {"headers": dict(headers)}
        if body is not None:
            kwargs["data"] = body
        if self.proxy is not None:
            kwargs["proxy"] = self.proxy
        if self.proxy_auth is not None:
            kwargs["proxy_auth"] = self.proxy_auth

        session = self._get_session()
        start = time.perf_counter()
        async with session.request(method, url, **kwargs) as response:
            data = await response.read()
            return TransportResponse(
                status=response.status,
                body=data,
                headers=dict(response.headers),
                elapsed=time.perf_counter() - start,
            )

    async def close(self) -> None:
        if self.__session is not None and self._owns_session:
            await self.__session.close()
        self.__session = None


class HTTPClient:
    """Dispatches :class:`RequestSpec` objects.

    Picks the ``Authorization`` header from the credential store, encodes the
    body, sends it through the transport and decodes the JSON answer. The
    status code is reported but never interpreted, there are no retries and
    transport exceptions are left to propagate.

    Parameters
    -----------
    credentials: :class:`~oauthcord.credentials.CredentialStore`
        The store requests are signed from.
    transport: Optional[:class:`Transport`]
        Defaults to a new :class:`AiohttpTransport`.
    """

    def __init__(self, credentials: CredentialStore, transport: Optional[Transport] = None) -> None:
        self.credentials: CredentialStore = credentials
        self.transport: Transport = transport if transport is not None else AiohttpTransport()
        user_agent = "DiscordBot (https://github.com/Mahirox36/oauthcord {0}) Python/{1[0]}.{1[1]} aiohttp/{2}"
        self.user_agent: str = user_agent.format(__version__, sys.version_info, aiohttp.__version__)

    def with_credentials(self, credentials: CredentialStore) -> HTTPClient:
        """Returns a dispatcher signing from ``credentials`` over the same transport."""
        return self.__class__(credentials, self.transport)

    async def close(self) -> None:
        await self.transport.close()

    def build_headers(self, spec: RequestSpec) -> Dict[str, str]:
        headers: Dict[str, str] = {"User-Agent": self.user_agent}
        authorization = self.credentials.authorization(spec.auth, spec.token)
        if authorization is not None:
            headers["Authorization"] = authorization
        return headers

    def build_body(self, spec: RequestSpec, headers: Dict[str, str]) -> Optional[bytes]:
        if spec.json is not None:
            headers["Content-Type"] = "application/json"
            return utils._to_json(spec.json).encode("utf-8")
        if spec.form is not None:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            return urlencode(spec.form).encode("utf-8")
        if spec.method in ("PUT", "DELETE"):
            # Discord rejects PUT and DELETE requests without a length.
            headers["Content-Length"] = "0"
        return None

    async def execute(self, spec: RequestSpec) -> ApiResult:
        """Sends ``spec`` and returns the decoded response.

        Returns
        --------
        :class:`~oauthcord.result.ApiResult`
            :class:`~oauthcord.result.Success` with the decoded JSON, whatever
            the status code, or :class:`~oauthcord.result.Failure` when the
            body is empty or not JSON.
        """
        headers = self.build_headers(spec)
        body = self.build_body(spec, headers)

        response = await self.transport.perform(spec.method, spec.url, headers, body)
        _log.debug("%s %s has returned %s.", spec.method, spec.url, response.status)

        diagnostics = None
        if spec.diagnostics:
            diagnostics = Diagnostics(
                method=spec.method,
                url=spec.url,
                status=response.status,
                elapsed=response.elapsed,
                headers=dict(response.headers),
            )

        try:
            payload = utils._from_json(response.body.decode("utf-8"))
        except ValueError:
            _log.debug("%s %s returned a body that is not JSON (%d bytes).", spec.method, spec.url, len(response.body))
            return Failure(dict(INVALID_RESPONSE), response.status, diagnostics)

        return Success(payload, response.status, diagnostics)
