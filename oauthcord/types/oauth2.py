# SPDX-License-Identifier: MIT

from __future__ import annotations

from typing import Any, Dict, Optional, TypedDict
from typing_extensions import NotRequired

from .snowflake import Snowflake


class Webhook(TypedDict):
    id: Snowflake
    type: int
    token: NotRequired[str]
    channel_id: Optional[Snowflake]
    guild_id: NotRequired[Optional[Snowflake]]
    name: Optional[str]
    url: NotRequired[str]


class Token(TypedDict):
    access_token: str
    token_type: str
    expires_in: NotRequired[int]
    refresh_token: NotRequired[str]
    scope: NotRequired[str]
    webhook: NotRequired[Webhook]
    guild: NotRequired[Dict[str, Any]]
