# custom_components/olisto/store.py
"""Config-entry backed credential store.

The entry's ``data`` mapping plays the role of the host settings store: it
holds ``username``, ``password``, ``token`` and ``pendingLogin`` and is
persisted by Home Assistant's config entry storage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .olisto_control.store import CredentialStore

if TYPE_CHECKING:  # pragma: no cover
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant


class ConfigEntryCredentialStore(CredentialStore):
    """Read/write the session keys on a config entry."""

    def __init__(self, hass: "HomeAssistant", entry: "ConfigEntry") -> None:
        self._hass = hass
        self._entry = entry

    def get(self, key: str) -> Any:
        return self._entry.data.get(key)

    def set(self, key: str, value: Any) -> None:
        if key in self._entry.data and self._entry.data[key] == value:
            return
        # Must run in the event loop; every caller is a coroutine on it.
        self._hass.config_entries.async_update_entry(
            self._entry, data={**self._entry.data, key: value}
        )
