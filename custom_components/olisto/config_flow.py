# custom_components/olisto/config_flow.py
"""Config flow for olisto integration."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import voluptuous as vol
from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.const import CONF_EMAIL, CONF_PASSWORD
from homeassistant.core import callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .const import CONF_TIMEOUT, DEFAULT_TIMEOUT, DOMAIN, MAX_TIMEOUT, MIN_TIMEOUT
from .olisto_control import ProviderClient, ProviderRejected, TransportError
from .olisto_control.const import KEY_PASSWORD, KEY_PENDING_LOGIN, KEY_TOKEN, KEY_USERNAME

_LOGGER = logging.getLogger(__name__)

USER_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_EMAIL): str,
        vol.Required(CONF_PASSWORD): str,
    }
)
REAUTH_SCHEMA = vol.Schema({vol.Required(CONF_PASSWORD): str})


def _entry_data(email: str, password: str, token: str) -> dict[str, Any]:
    return {
        KEY_USERNAME: email,
        KEY_PASSWORD: password,
        KEY_TOKEN: token,
        KEY_PENDING_LOGIN: False,
    }


class OlistoConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for olisto."""
    VERSION = 1

    async def _async_try_login(
        self, email: str, password: str, errors: dict[str, str]
    ) -> str | None:
        """Return a token, or fill ``errors`` and return None."""
        provider = ProviderClient(async_get_clientsession(self.hass))
        try:
            return await provider.login(email, password)
        except ProviderRejected:
            errors["base"] = "invalid_auth"
        except TransportError as err:
            _LOGGER.debug("Olisto login during setup failed: %s", err)
            errors["base"] = "cannot_connect"
        return None

    # ---------- Manual user-initiated path ----------
    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        errors: dict[str, str] = {}
        if user_input is not None:
            email = user_input[CONF_EMAIL].strip()
            await self.async_set_unique_id(email.lower())
            self._abort_if_unique_id_configured()

            token = await self._async_try_login(email, user_input[CONF_PASSWORD], errors)
            if token:
                return self.async_create_entry(
                    title=email, data=_entry_data(email, user_input[CONF_PASSWORD], token)
                )

        return self.async_show_form(step_id="user", data_schema=USER_SCHEMA, errors=errors)

    # ---------- Re-authentication ----------
    async def async_step_reauth(
        self, entry_data: Mapping[str, Any]
    ) -> ConfigFlowResult:
        return await self.async_step_reauth_confirm()

    async def async_step_reauth_confirm(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        entry = self._get_reauth_entry()
        email = entry.data.get(KEY_USERNAME) or entry.title
        errors: dict[str, str] = {}

        if user_input is not None:
            token = await self._async_try_login(email, user_input[CONF_PASSWORD], errors)
            if token:
                return self.async_update_reload_and_abort(
                    entry, data_updates=_entry_data(email, user_input[CONF_PASSWORD], token)
                )

        return self.async_show_form(
            step_id="reauth_confirm",
            data_schema=REAUTH_SCHEMA,
            description_placeholders={"email": email},
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> "OlistoOptionsFlow":
        return OlistoOptionsFlow(config_entry)


class OlistoOptionsFlow(OptionsFlow):
    """Options flow for the per-request timeout."""
    def __init__(self, entry: ConfigEntry) -> None:
        self._entry = entry

    async def async_step_init(self, user_input: dict | None = None):
        if user_input is not None:
            return self.async_create_entry(
                title="", data={CONF_TIMEOUT: float(user_input[CONF_TIMEOUT])}
            )

        current = self._entry.options.get(CONF_TIMEOUT, DEFAULT_TIMEOUT)
        schema = vol.Schema(
            {
                vol.Required(CONF_TIMEOUT, default=current): vol.All(
                    vol.Coerce(float), vol.Range(min=MIN_TIMEOUT, max=MAX_TIMEOUT)
                )
            }
        )
        return self.async_show_form(step_id="init", data_schema=schema)
