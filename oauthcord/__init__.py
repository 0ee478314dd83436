"""
Discord OAuth2 and REST API Wrapper
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

A client for Discord's OAuth2 flows and REST resources, signing requests as
a user or as the application's bot.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

__title__ = "oauthcord"
__author__ = "Mahirox36"
__license__ = "MIT"
__version__ = "0.1.0"

import logging

from .client import *
from .config import *
from .credentials import *
from .errors import *
from .http import *
from .oauth2 import *
from .resources import *
from .result import *
from .scopes import *

logging.getLogger(__name__).addHandler(logging.NullHandler())
