"""OAuth2 flows for Discord

This module provides the token endpoint calls, the authorization links and
per-user sessions.
"""

from .client import OAuth2Client
from .token import OAuth2Token
from .session import OAuth2Session

__all__ = (
    'OAuth2Client',
    'OAuth2Token',
    'OAuth2Session'
)
