"""Switch platform for Location Tracking."""

from __future__ import annotations

from typing import Any

from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .coordinator import LocationTrackingCoordinator
from .entity import LocationTrackingEntity


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Location Tracking switch from a config entry."""
    coordinator: LocationTrackingCoordinator = hass.data[DOMAIN][config_entry.entry_id]
    async_add_entities([TrackingSwitch(coordinator)])


class TrackingSwitch(LocationTrackingEntity, SwitchEntity):
    """Move tracking between foreground and background."""

    _attr_translation_key = "tracking"

    def __init__(self, coordinator: LocationTrackingCoordinator) -> None:
        """Initialize the switch."""
        super().__init__(coordinator, "tracking")

    @property
    def is_on(self) -> bool:
        """Return true while providers are subscribed."""
        return self.coordinator.data.tracking

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Bring tracking to the foreground."""
        self.coordinator.async_foreground()

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Send tracking to the background."""
        self.coordinator.async_background()
