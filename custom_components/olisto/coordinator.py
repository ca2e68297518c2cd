# custom_components/olisto/coordinator.py
"""Periodic Olisto session health check.

Runs ``check_login`` every HEALTH_CHECK_INTERVAL and once at setup. Failures
never propagate: the coordinator logs them (UpdateFailed) and the next tick
retries. Missing or rejected credentials ask the user to re-authenticate.
"""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryAuthFailed
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .const import DOMAIN, HEALTH_CHECK_INTERVAL
from .olisto_control import (
    LoginPending,
    MissingCredentials,
    OlistoError,
    ReloginFailed,
    SessionClient,
)

_LOGGER: logging.Logger = logging.getLogger(__name__)


class OlistoSessionCoordinator(DataUpdateCoordinator[bool]):
    """Keep the Olisto bearer session alive; data is True when it is valid."""

    def __init__(self, hass: HomeAssistant, client: SessionClient, entry: ConfigEntry) -> None:
        super().__init__(
            hass,
            _LOGGER,
            config_entry=entry,
            name=f"{DOMAIN}-session",
            update_interval=HEALTH_CHECK_INTERVAL,
        )
        self.client = client

    async def _async_update_data(self) -> bool:
        try:
            await self.client.check_login()
        except LoginPending:
            # the login in flight will settle the session
            _LOGGER.debug("check_login skipped: login in progress")
            return bool(self.data)
        except MissingCredentials as err:
            raise ConfigEntryAuthFailed(str(err)) from err
        except ReloginFailed as err:
            if err.credentials_rejected:
                raise ConfigEntryAuthFailed(str(err)) from err
            raise UpdateFailed(f"Olisto login check failed: {err}") from err
        except OlistoError as err:
            raise UpdateFailed(f"Olisto login check failed: {err}") from err
        return True
