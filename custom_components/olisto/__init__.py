# custom_components/olisto/__init__.py
"""Olisto HA integration root module."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .const import CONF_TIMEOUT, DEFAULT_TIMEOUT, DOMAIN, PLATFORMS

if TYPE_CHECKING:  # pragma: no cover
    from homeassistant.core import HomeAssistant
    from homeassistant.config_entries import ConfigEntry

_LOGGER = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────
# HA entry setup / unload
# ────────────────────────────────────────────────────────────────────────────────
async def async_setup_entry(hass: "HomeAssistant", entry: "ConfigEntry") -> bool:
    """Set up an Olisto account from a config entry."""
    # Lazy HA imports keep the olisto_control library importable without HA
    from homeassistant.helpers.aiohttp_client import async_get_clientsession

    from .coordinator import OlistoSessionCoordinator
    from .models import OlistoData
    from .olisto_control import SessionClient
    from .services import async_register_services
    from .store import ConfigEntryCredentialStore

    timeout = float(entry.options.get(CONF_TIMEOUT, DEFAULT_TIMEOUT))
    client = SessionClient.create(
        async_get_clientsession(hass),
        ConfigEntryCredentialStore(hass, entry),
        timeout=timeout,
    )
    coordinator = OlistoSessionCoordinator(hass, client, entry)

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = OlistoData(
        entry.title, client, coordinator, dict(entry.options)
    )

    # Eager health check. Not fatal: the coordinator logs the failure and the
    # next interval (or the first service call) tries again.
    await coordinator.async_refresh()
    if not coordinator.last_update_success:
        _LOGGER.warning("Initial Olisto login check failed for %s", entry.title)

    # The coordinator only reschedules itself while it has listeners
    entry.async_on_unload(coordinator.async_add_listener(lambda: None))

    await async_register_services(hass)

    entry.async_on_unload(entry.add_update_listener(_async_update_listener))
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    _LOGGER.debug("Olisto entry %s set up (timeout=%.1fs)", entry.title, timeout)
    return True


async def async_unload_entry(hass: "HomeAssistant", entry: "ConfigEntry") -> bool:
    """Unload a config entry."""
    from .services import async_unregister_services

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id, None)
        if not hass.data[DOMAIN]:
            async_unregister_services(hass)
    return unload_ok


async def _async_update_listener(hass: "HomeAssistant", entry: "ConfigEntry") -> None:
    """Reload on options changes only; token writes also land here."""
    from .models import OlistoData

    data: Optional[OlistoData] = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if data is not None and data.options == dict(entry.options):
        return
    await hass.config_entries.async_reload(entry.entry_id)
