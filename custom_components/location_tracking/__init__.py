"""The Location Tracking integration."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EVENT_HOMEASSISTANT_STOP, Platform
from homeassistant.core import Event, HomeAssistant, callback

from .const import DOMAIN
from .coordinator import LocationTrackingCoordinator

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [
    Platform.BINARY_SENSOR,
    Platform.DEVICE_TRACKER,
    Platform.SENSOR,
    Platform.SWITCH,
]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Location Tracking from a config entry."""
    coordinator = LocationTrackingCoordinator(hass, entry)

    failures = coordinator.async_foreground()
    if failures:
        _LOGGER.debug(
            "Location tracking for %s started with %s of %s providers failed",
            entry.title,
            len(failures),
            len(coordinator.manager.snapshot()),
        )

    @callback
    def _async_on_stop(event: Event) -> None:
        coordinator.async_background()

    entry.async_on_unload(
        hass.bus.async_listen_once(EVENT_HOMEASSISTANT_STOP, _async_on_stop)
    )

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = coordinator

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        coordinator: LocationTrackingCoordinator = hass.data[DOMAIN].pop(entry.entry_id)
        coordinator.async_background()
    return unload_ok
