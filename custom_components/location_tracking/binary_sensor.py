"""Binary sensor platform for Location Tracking."""

from __future__ import annotations

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .coordinator import LocationTrackingCoordinator
from .entity import LocationTrackingEntity
from .models import ProviderIdentity


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Location Tracking binary sensors from a config entry."""
    coordinator: LocationTrackingCoordinator = hass.data[DOMAIN][config_entry.entry_id]
    async_add_entities(
        ProviderEnabledSensor(coordinator, identity) for identity in ProviderIdentity
    )


class ProviderEnabledSensor(LocationTrackingEntity, BinarySensorEntity):
    """Binary sensor indicating whether a provider is enabled at its source."""

    _attr_device_class = BinarySensorDeviceClass.CONNECTIVITY
    _attr_entity_category = EntityCategory.DIAGNOSTIC

    def __init__(
        self, coordinator: LocationTrackingCoordinator, identity: ProviderIdentity
    ) -> None:
        """Initialize the binary sensor."""
        super().__init__(coordinator, f"{identity.name.lower()}_enabled")
        self.identity = identity
        self._attr_translation_key = f"{identity.name.lower()}_enabled"

    @property
    def is_on(self) -> bool | None:
        """Return true if the provider is enabled."""
        data = self.coordinator.data
        if self.identity in data.failures:
            return False
        return data.enabled.get(self.identity)
