# custom_components/olisto/button.py
"""
Olisto: virtual push buttons.

- One button entity per visible unit of the triggi-buttons channel.
- Pressing calls the shared SessionClient; no state is cached locally.
- Availability follows the session health check coordinator.
- Buttons created upstream are picked up after the next successful health
  check. Buttons deleted upstream keep their entity until the entry reloads.
"""

from __future__ import annotations

import logging

from homeassistant.components.button import ButtonEntity
from homeassistant.core import callback
from homeassistant.exceptions import HomeAssistantError, PlatformNotReady
from homeassistant.helpers.device_registry import DeviceEntryType
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER
from .coordinator import OlistoSessionCoordinator
from .models import OlistoData
from .olisto_control import Button, OlistoError, SessionClient

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass, entry, async_add_entities):
    data: OlistoData = hass.data[DOMAIN][entry.entry_id]
    known: set[str] = set()

    async def _async_add_new_buttons() -> None:
        buttons = await data.client.list_buttons()
        new = [b for b in buttons if b.id not in known]
        if not new:
            return
        known.update(b.id for b in new)
        _LOGGER.debug("olisto.button: %d new buttons for %s", len(new), entry.title)
        async_add_entities([OlistoPushButton(data.coordinator, data.client, entry, b) for b in new])

    try:
        await _async_add_new_buttons()
    except OlistoError as err:
        raise PlatformNotReady(f"Could not fetch Olisto buttons: {err}") from err

    async def _async_rescan() -> None:
        try:
            await _async_add_new_buttons()
        except OlistoError as err:
            _LOGGER.debug("olisto.button: rescan skipped: %s", err)

    @callback
    def _on_session_checked() -> None:
        if data.coordinator.last_update_success:
            entry.async_create_background_task(hass, _async_rescan(), f"{DOMAIN}-button-rescan")

    entry.async_on_unload(data.coordinator.async_add_listener(_on_session_checked))


class OlistoPushButton(CoordinatorEntity[OlistoSessionCoordinator], ButtonEntity):
    """A provider-side virtual button."""

    _attr_has_entity_name = True
    _attr_icon = "mdi:gesture-tap-button"

    def __init__(self, coordinator, client: SessionClient, entry, button: Button) -> None:
        super().__init__(coordinator)
        self._client = client
        self._button_id = button.id

        self._attr_name = button.name
        self._attr_unique_id = f"{entry.entry_id}-button-{button.id}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry.entry_id)},
            manufacturer=MANUFACTURER,
            model="Cloud account",
            name=entry.title or "Olisto",
            entry_type=DeviceEntryType.SERVICE,
        )

    async def async_press(self) -> None:
        try:
            ok = await self._client.press_button(self._button_id)
        except OlistoError as err:
            _LOGGER.warning("Failed to press Olisto button %s: %s", self._button_id, err)
            raise HomeAssistantError(f"Olisto button press failed: {err}") from err
        if not ok:
            raise HomeAssistantError("Olisto rejected the button press")
