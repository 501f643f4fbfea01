"""Config flow for Location Tracking integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_NAME
from homeassistant.helpers import selector

from .const import CONF_NETWORK_ENTITY, CONF_SATELLITE_ENTITY, DEFAULT_NAME, DOMAIN

_LOGGER = logging.getLogger(__name__)

SOURCE_ENTITY_SELECTOR = selector.EntitySelector(
    selector.EntitySelectorConfig(domain=["device_tracker", "person", "sensor", "zone"])
)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Optional(CONF_NETWORK_ENTITY): SOURCE_ENTITY_SELECTOR,
        vol.Optional(CONF_SATELLITE_ENTITY): SOURCE_ENTITY_SELECTOR,
    }
)


class LocationTrackingConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Location Tracking."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step: pick the source entities."""
        errors: dict[str, str] = {}

        if user_input is not None:
            network = user_input.get(CONF_NETWORK_ENTITY)
            satellite = user_input.get(CONF_SATELLITE_ENTITY)

            if not network and not satellite:
                errors["base"] = "no_sources"
            else:
                await self.async_set_unique_id(f"{network or ''}|{satellite or ''}")
                self._abort_if_unique_id_configured()
                _LOGGER.debug(
                    "Creating location tracking entry for %s and %s", network, satellite
                )
                return self.async_create_entry(
                    title=user_input[CONF_NAME],
                    data={
                        CONF_NETWORK_ENTITY: network,
                        CONF_SATELLITE_ENTITY: satellite,
                    },
                )

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )
