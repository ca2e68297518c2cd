# custom_components/olisto/const.py
"""Constants for the Olisto integration."""

from __future__ import annotations

from datetime import timedelta

from .olisto_control.const import DEFAULT_TIMEOUT  # noqa: F401  (re-exported)

# ────────────────────────────────────────────────────────────────────────────────
# Core identifiers
# ────────────────────────────────────────────────────────────────────────────────
DOMAIN: str = "olisto"
MANUFACTURER: str = "Olisto"

# ────────────────────────────────────────────────────────────────────────────────
# Session health check
# ────────────────────────────────────────────────────────────────────────────────
HEALTH_CHECK_INTERVAL = timedelta(minutes=15)

# ────────────────────────────────────────────────────────────────────────────────
# Options
# ────────────────────────────────────────────────────────────────────────────────
CONF_TIMEOUT = "timeout"
MIN_TIMEOUT = 1.0
MAX_TIMEOUT = 60.0

# ────────────────────────────────────────────────────────────────────────────────
# Service names / fields
# ────────────────────────────────────────────────────────────────────────────────
SERVICE_ENABLE_TRIGG = "enable_trigg"
SERVICE_DISABLE_TRIGG = "disable_trigg"
SERVICE_PRESS_BUTTON = "press_button"
SERVICE_TRIGG_IS_ENABLED = "trigg_is_enabled"
SERVICE_SEARCH_TRIGGS = "search_triggs"
SERVICE_SEARCH_BUTTONS = "search_buttons"
SERVICE_LOGIN = "login"

ATTR_CONFIG_ENTRY_ID = "config_entry_id"
ATTR_TRIGG_ID = "trigg_id"
ATTR_BUTTON_ID = "button_id"
ATTR_QUERY = "query"

PLATFORMS = ["button"]
