"""DataUpdateCoordinator for Location Tracking."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import (
    ATTR_PROVIDER,
    CONF_NETWORK_ENTITY,
    CONF_SATELLITE_ENTITY,
    DOMAIN,
    EVENT_PROVIDER_DISABLED,
    EVENT_PROVIDER_ENABLED,
    NETWORK_MIN_DISPLACEMENT_M,
    NETWORK_MIN_INTERVAL_MS,
    SATELLITE_MIN_DISPLACEMENT_M,
    SATELLITE_MIN_INTERVAL_MS,
)
from .manager import SubscriptionManager
from .models import (
    LocationTrackingData,
    MalformedEvent,
    PositionSample,
    ProviderIdentity,
    ProviderStatus,
    SubscriptionConfig,
    UnknownStatus,
)
from .provider import EntityProviderHandle, ProviderUnavailable
from .router import EventRouter

_LOGGER = logging.getLogger(__name__)


class LocationTrackingCoordinator(DataUpdateCoordinator[LocationTrackingData]):
    """Coordinator that owns the subscription manager and publishes its events."""

    config_entry: ConfigEntry

    def __init__(self, hass: HomeAssistant, config_entry: ConfigEntry) -> None:
        """Initialize the coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            config_entry=config_entry,
            update_interval=None,
        )
        self.data = LocationTrackingData()
        self.router = EventRouter(
            on_position_changed=self._on_position_changed,
            on_provider_status_changed=self._on_provider_status_changed,
            on_provider_availability_changed=self._on_provider_availability_changed,
            on_diagnostic=self._on_diagnostic,
            display_sink=self._on_display,
        )
        self.manager = SubscriptionManager(
            [
                (
                    EntityProviderHandle(
                        hass,
                        ProviderIdentity.NETWORK,
                        config_entry.data.get(CONF_NETWORK_ENTITY),
                    ),
                    SubscriptionConfig(NETWORK_MIN_INTERVAL_MS, NETWORK_MIN_DISPLACEMENT_M),
                ),
                (
                    EntityProviderHandle(
                        hass,
                        ProviderIdentity.SATELLITE,
                        config_entry.data.get(CONF_SATELLITE_ENTITY),
                    ),
                    SubscriptionConfig(
                        SATELLITE_MIN_INTERVAL_MS, SATELLITE_MIN_DISPLACEMENT_M
                    ),
                ),
            ],
            self.router,
        )

    @callback
    def async_foreground(self) -> dict[ProviderIdentity, ProviderUnavailable]:
        """Start tracking and record any provider that could not subscribe."""
        failures = self.manager.on_foreground()
        self.data.tracking = True
        self.data.failures = {identity: err.reason for identity, err in failures.items()}
        for identity, err in failures.items():
            _LOGGER.warning("Position provider %s unavailable: %s", identity, err.reason)
        self.async_set_updated_data(self.data)
        return failures

    @callback
    def async_background(self) -> None:
        """Stop tracking."""
        self.manager.on_background()
        self.data.tracking = False
        self.data.failures = {}
        self.async_set_updated_data(self.data)

    @callback
    def _on_position_changed(self, sample: PositionSample) -> None:
        # Published together with the display text that always follows.
        self.data.position = sample
        self.data.samples[sample.source] = sample

    @callback
    def _on_display(self, text: str) -> None:
        self.data.display = text
        self.async_set_updated_data(self.data)

    @callback
    def _on_provider_status_changed(
        self, identity: ProviderIdentity, status: ProviderStatus | UnknownStatus
    ) -> None:
        self.data.statuses[identity] = status
        self.async_set_updated_data(self.data)

    @callback
    def _on_provider_availability_changed(
        self, identity: ProviderIdentity, enabled: bool
    ) -> None:
        previous = self.data.enabled.get(identity)
        self.data.enabled[identity] = enabled
        if previous != enabled:
            self.hass.bus.async_fire(
                EVENT_PROVIDER_ENABLED if enabled else EVENT_PROVIDER_DISABLED,
                {ATTR_PROVIDER: identity.value},
            )
        self.async_set_updated_data(self.data)

    @callback
    def _on_diagnostic(self, identity: ProviderIdentity, malformed: MalformedEvent) -> None:
        _LOGGER.warning(
            "Ignoring malformed event from %s: %s", identity, malformed.reason
        )
