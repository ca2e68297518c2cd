# custom_components/olisto/olisto_control/const.py
"""Olisto cloud protocol constants.

The wire contract is owned by Olisto; these values mirror what the
official apps send.
"""

from __future__ import annotations

BASE_URL: str = "https://connect.olisto.com"

# ────────────────────────────────────────────────────────────────────────────────
# Endpoints (relative to BASE_URL)
# ────────────────────────────────────────────────────────────────────────────────
LOGIN_PATH = "/api/v2/users/login"
LOGIN_PARAMS = {"response_type": "bearer"}
CHECK_LOGIN_PATH = "/api/v2/users/checkLogin"
TRIGGS_PATH = "/api/v2/triggs"
TRIGGS_PARAMS = {"format": "6", "bundleInstance": "null"}
TRIGG_ENABLED_PATH = "/api/v2/triggs/{trigg_id}/enabled"
CHANNEL_ACCOUNTS_PATH = "/api/v1/channelaccounts"
CHANNEL_ACCOUNTS_PARAMS = {"showUnits": "true"}
BUTTON_PUSH_PATH = "/channel/triggi-buttons/push/{button_id}"

# ────────────────────────────────────────────────────────────────────────────────
# Request defaults
# ────────────────────────────────────────────────────────────────────────────────
LOGIN_LOCALE = "en-US"
BUTTON_CHANNEL = "triggi-buttons"
DEFAULT_TIMEOUT: float = 10.0

# Store keys (shared with the Home Assistant entry data)
KEY_USERNAME = "username"
KEY_PASSWORD = "password"
KEY_TOKEN = "token"
KEY_PENDING_LOGIN = "pendingLogin"

__all__ = [
    "BASE_URL",
    "BUTTON_CHANNEL",
    "DEFAULT_TIMEOUT",
    "KEY_PASSWORD",
    "KEY_PENDING_LOGIN",
    "KEY_TOKEN",
    "KEY_USERNAME",
    "LOGIN_LOCALE",
]
