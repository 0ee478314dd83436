# SPDX-License-Identifier: MIT

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .urls import DISCORD_API_URL

__all__ = (
    "ClientConfig",
)

load_dotenv()


@dataclass(frozen=True)
class ClientConfig:
    """The four construction values of a :class:`~oauthcord.client.Client`, plus the API root."""

    client_id: int
    client_secret: str
    redirect_uri: str
    bot_token: str
    api_base: str = DISCORD_API_URL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """Reads ``DISCORD_CLIENT_ID``, ``DISCORD_CLIENT_SECRET``,
        ``DISCORD_REDIRECT_URI``, ``DISCORD_BOT_TOKEN`` and the optional
        ``DISCORD_API_URL``. A ``.env`` file is loaded on import.

        Raises
        -------
        KeyError
            One of the mandatory variables is not set.
        ValueError
            ``DISCORD_CLIENT_ID`` is not an integer.
        """
        env = os.environ if environ is None else environ
        return cls(
            client_id=int(env["DISCORD_CLIENT_ID"]),
            client_secret=env["DISCORD_CLIENT_SECRET"],
            redirect_uri=env["DISCORD_REDIRECT_URI"],
            bot_token=env["DISCORD_BOT_TOKEN"],
            api_base=env.get("DISCORD_API_URL", DISCORD_API_URL),
        )
