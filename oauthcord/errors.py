# SPDX-License-Identifier: MIT

from __future__ import annotations

__all__ = (
    "OAuthcordException",
    "InvalidArgument",
    "UnknownEndpoint",
)


class OAuthcordException(Exception):
    """Base exception class for oauthcord.

    Only raised for mistakes in calling code. Anything the platform answers
    comes back as a result object, and network failures surface as the
    transport's own exceptions.
    """
    pass


class InvalidArgument(OAuthcordException):
    """Exception that's raised when an argument to a function has the wrong type."""
    pass


class UnknownEndpoint(OAuthcordException, KeyError):
    """Exception that's raised when a catalog endpoint name does not exist.

    Attributes
    ----------
    name: :class:`str`
        The endpoint name that was looked up.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown endpoint {name!r}")

    def __str__(self) -> str:
        return f"Unknown endpoint {self.name!r}"
