"""Sensor platform for Location Tracking."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .coordinator import LocationTrackingCoordinator
from .entity import LocationTrackingEntity
from .models import LocationTrackingData, ProviderIdentity, ProviderStatus

STATUS_UNRECOGNIZED = "unrecognized"
STATUS_OPTIONS = [status.name.lower() for status in ProviderStatus] + [STATUS_UNRECOGNIZED]


@dataclass(frozen=True, kw_only=True)
class LocationTrackingSensorEntityDescription(SensorEntityDescription):
    """Describe a Location Tracking sensor entity."""

    value_fn: Callable[[LocationTrackingData], str | None]


def _status_value(identity: ProviderIdentity) -> Callable[[LocationTrackingData], str | None]:
    def _value(data: LocationTrackingData) -> str | None:
        if (status := data.statuses.get(identity)) is None:
            return None
        if isinstance(status, ProviderStatus):
            return status.name.lower()
        return STATUS_UNRECOGNIZED

    return _value


SENSOR_DESCRIPTIONS: tuple[LocationTrackingSensorEntityDescription, ...] = (
    LocationTrackingSensorEntityDescription(
        key="position",
        translation_key="position",
        value_fn=lambda data: data.display,
    ),
    *(
        LocationTrackingSensorEntityDescription(
            key=f"{identity.name.lower()}_status",
            translation_key=f"{identity.name.lower()}_status",
            device_class=SensorDeviceClass.ENUM,
            options=STATUS_OPTIONS,
            entity_category=EntityCategory.DIAGNOSTIC,
            value_fn=_status_value(identity),
        )
        for identity in ProviderIdentity
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Location Tracking sensors from a config entry."""
    coordinator: LocationTrackingCoordinator = hass.data[DOMAIN][config_entry.entry_id]
    async_add_entities(
        LocationTrackingSensor(coordinator, description)
        for description in SENSOR_DESCRIPTIONS
    )


class LocationTrackingSensor(LocationTrackingEntity, SensorEntity):
    """Represent a Location Tracking sensor."""

    entity_description: LocationTrackingSensorEntityDescription

    def __init__(
        self,
        coordinator: LocationTrackingCoordinator,
        description: LocationTrackingSensorEntityDescription,
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, description.key)
        self.entity_description = description

    @property
    def native_value(self) -> str | None:
        """Return the sensor value."""
        return self.entity_description.value_fn(self.coordinator.data)
