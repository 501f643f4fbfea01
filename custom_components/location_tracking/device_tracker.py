"""Device tracker platform for Location Tracking."""

from __future__ import annotations

from typing import Any

from homeassistant.components.device_tracker import SourceType, TrackerEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import ATTR_ALTITUDE, ATTR_BEARING, ATTR_LAST_FIX, ATTR_LOCATION_SOURCE, DOMAIN
from .coordinator import LocationTrackingCoordinator
from .entity import LocationTrackingEntity


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Location Tracking device tracker from a config entry."""
    coordinator: LocationTrackingCoordinator = hass.data[DOMAIN][config_entry.entry_id]
    async_add_entities([LocationTracker(coordinator)])


class LocationTracker(LocationTrackingEntity, TrackerEntity):
    """Represent the reconciled current position."""

    _attr_name = None

    def __init__(self, coordinator: LocationTrackingCoordinator) -> None:
        """Initialize the tracker entity."""
        super().__init__(coordinator, "tracker")

    @property
    def source_type(self) -> SourceType:
        """Return the source type."""
        return SourceType.GPS

    @property
    def latitude(self) -> float | None:
        """Return latitude value of the device."""
        if (position := self.coordinator.data.position) is None:
            return None
        return position.latitude

    @property
    def longitude(self) -> float | None:
        """Return longitude value of the device."""
        if (position := self.coordinator.data.position) is None:
            return None
        return position.longitude

    @property
    def location_accuracy(self) -> float:
        """Return the location accuracy of the device."""
        return 0

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        """Return additional state attributes."""
        if (position := self.coordinator.data.position) is None:
            return None

        attrs: dict[str, Any] = {
            ATTR_LOCATION_SOURCE: position.source.value,
            ATTR_LAST_FIX: position.timestamp.isoformat(),
        }
        if position.has_altitude:
            attrs[ATTR_ALTITUDE] = position.altitude
        if position.has_bearing:
            attrs[ATTR_BEARING] = position.bearing
        return attrs
