"""Tests for the Location Tracking config flow."""

from __future__ import annotations

from unittest.mock import patch

from homeassistant.config_entries import SOURCE_USER
from homeassistant.const import CONF_NAME
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResultType

from custom_components.location_tracking.const import (
    CONF_NETWORK_ENTITY,
    CONF_SATELLITE_ENTITY,
    DOMAIN,
)


async def test_user_flow(hass: HomeAssistant, enable_custom_integrations) -> None:
    result = await hass.config_entries.flow.async_init(DOMAIN, context={"source": SOURCE_USER})
    assert result["type"] is FlowResultType.FORM
    assert result["step_id"] == "user"

    with patch(
        "custom_components.location_tracking.async_setup_entry", return_value=True
    ):
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"],
            {
                CONF_NAME: "Phone",
                CONF_NETWORK_ENTITY: "device_tracker.phone_network",
                CONF_SATELLITE_ENTITY: "device_tracker.phone_gps",
            },
        )
        await hass.async_block_till_done()

    assert result["type"] is FlowResultType.CREATE_ENTRY
    assert result["title"] == "Phone"
    assert result["data"] == {
        CONF_NETWORK_ENTITY: "device_tracker.phone_network",
        CONF_SATELLITE_ENTITY: "device_tracker.phone_gps",
    }


async def test_user_flow_requires_a_source(
    hass: HomeAssistant, enable_custom_integrations
) -> None:
    result = await hass.config_entries.flow.async_init(DOMAIN, context={"source": SOURCE_USER})

    result = await hass.config_entries.flow.async_configure(
        result["flow_id"], {CONF_NAME: "Phone"}
    )

    assert result["type"] is FlowResultType.FORM
    assert result["errors"] == {"base": "no_sources"}
