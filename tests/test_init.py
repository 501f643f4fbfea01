"""Tests for setting up the Location Tracking integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntryState
from homeassistant.const import STATE_OFF, STATE_ON, STATE_UNAVAILABLE
from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_capture_events,
)

from custom_components.location_tracking.const import (
    CONF_NETWORK_ENTITY,
    CONF_SATELLITE_ENTITY,
    DOMAIN,
    EVENT_PROVIDER_DISABLED,
)
from custom_components.location_tracking.models import (
    PositionSample,
    PositionUpdated,
    ProviderIdentity,
    ProviderStatus,
)

NETWORK_SOURCE = "device_tracker.phone_network"
SATELLITE_SOURCE = "device_tracker.phone_gps"


async def _setup(hass: HomeAssistant, **data) -> MockConfigEntry:
    entry = MockConfigEntry(domain=DOMAIN, title="Phone", data=data)
    entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()
    return entry


def _entity_id(hass: HomeAssistant, domain: str, entry: MockConfigEntry, key: str) -> str:
    entity_id = er.async_get(hass).async_get_entity_id(domain, DOMAIN, f"{entry.entry_id}_{key}")
    assert entity_id is not None
    return entity_id


async def test_setup_publishes_position(hass: HomeAssistant, enable_custom_integrations) -> None:
    hass.states.async_set(NETWORK_SOURCE, "home", {"latitude": 40.0, "longitude": -73.0})

    entry = await _setup(hass, **{CONF_NETWORK_ENTITY: NETWORK_SOURCE})

    assert entry.state is ConfigEntryState.LOADED
    position = hass.states.get(_entity_id(hass, "sensor", entry, "position"))
    assert position.state == "40.0 -73.0"
    tracker = hass.states.get(_entity_id(hass, "device_tracker", entry, "tracker"))
    assert tracker.attributes["latitude"] == 40.0
    assert tracker.attributes["longitude"] == -73.0
    assert tracker.attributes["location_source"] == "network"


async def test_missing_source_is_partial_failure(
    hass: HomeAssistant, enable_custom_integrations
) -> None:
    hass.states.async_set(NETWORK_SOURCE, "home", {"latitude": 40.0, "longitude": -73.0})

    entry = await _setup(hass, **{CONF_NETWORK_ENTITY: NETWORK_SOURCE})

    coordinator = hass.data[DOMAIN][entry.entry_id]
    assert coordinator.manager.active_providers == {ProviderIdentity.NETWORK}
    assert ProviderIdentity.SATELLITE in coordinator.data.failures
    satellite = hass.states.get(_entity_id(hass, "binary_sensor", entry, "satellite_enabled"))
    assert satellite.state == STATE_OFF


async def test_tracking_switch_moves_to_background(
    hass: HomeAssistant, enable_custom_integrations
) -> None:
    entry = await _setup(
        hass,
        **{CONF_NETWORK_ENTITY: NETWORK_SOURCE, CONF_SATELLITE_ENTITY: SATELLITE_SOURCE},
    )
    coordinator = hass.data[DOMAIN][entry.entry_id]
    switch = _entity_id(hass, "switch", entry, "tracking")
    assert hass.states.get(switch).state == STATE_ON

    await hass.services.async_call("switch", "turn_off", {"entity_id": switch}, blocking=True)
    hass.states.async_set(SATELLITE_SOURCE, "home", {"latitude": 51.5, "longitude": -0.1})
    await hass.async_block_till_done()

    assert hass.states.get(switch).state == STATE_OFF
    assert coordinator.manager.active_providers == frozenset()
    assert coordinator.data.position is None

    await hass.services.async_call("switch", "turn_on", {"entity_id": switch}, blocking=True)
    await hass.async_block_till_done()

    assert coordinator.manager.active_providers == {
        ProviderIdentity.NETWORK,
        ProviderIdentity.SATELLITE,
    }
    assert coordinator.data.display == "51.5 -0.1"


async def test_provider_disabled_event(hass: HomeAssistant, enable_custom_integrations) -> None:
    hass.states.async_set(SATELLITE_SOURCE, "home", {"latitude": 51.5, "longitude": -0.1})
    entry = await _setup(hass, **{CONF_SATELLITE_ENTITY: SATELLITE_SOURCE})
    events = async_capture_events(hass, EVENT_PROVIDER_DISABLED)

    hass.states.async_remove(SATELLITE_SOURCE)
    await hass.async_block_till_done()

    assert [event.data for event in events] == [{"provider": "gps"}]
    satellite = hass.states.get(_entity_id(hass, "binary_sensor", entry, "satellite_enabled"))
    assert satellite.state == STATE_OFF


async def test_unload_stops_providers(hass: HomeAssistant, enable_custom_integrations) -> None:
    entry = await _setup(hass, **{CONF_NETWORK_ENTITY: NETWORK_SOURCE})
    coordinator = hass.data[DOMAIN][entry.entry_id]

    assert await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()

    assert entry.state is ConfigEntryState.NOT_LOADED
    assert coordinator.manager.active_providers == frozenset()
    assert entry.entry_id not in hass.data[DOMAIN]


async def test_status_recovers_after_background(
    hass: HomeAssistant, enable_custom_integrations
) -> None:
    hass.states.async_set(SATELLITE_SOURCE, "home", {"latitude": 1.0, "longitude": 1.0})
    entry = await _setup(hass, **{CONF_SATELLITE_ENTITY: SATELLITE_SOURCE})
    coordinator = hass.data[DOMAIN][entry.entry_id]

    hass.states.async_set(SATELLITE_SOURCE, STATE_UNAVAILABLE)
    await hass.async_block_till_done()
    hass.states.async_remove(SATELLITE_SOURCE)
    await hass.async_block_till_done()
    coordinator.async_background()
    hass.states.async_set(SATELLITE_SOURCE, "home", {"latitude": 2.0, "longitude": 2.0})
    coordinator.async_foreground()
    await hass.async_block_till_done()

    assert coordinator.data.display == "2.0 2.0"
    assert coordinator.data.statuses[ProviderIdentity.SATELLITE] is ProviderStatus.AVAILABLE
    assert coordinator.data.enabled[ProviderIdentity.SATELLITE] is True
    status = hass.states.get(_entity_id(hass, "sensor", entry, "satellite_status"))
    assert status.state == "available"
    enabled = hass.states.get(_entity_id(hass, "binary_sensor", entry, "satellite_enabled"))
    assert enabled.state == STATE_ON


async def test_fix_published_once_with_display(
    hass: HomeAssistant, enable_custom_integrations
) -> None:
    entry = await _setup(hass, **{CONF_NETWORK_ENTITY: NETWORK_SOURCE})
    coordinator = hass.data[DOMAIN][entry.entry_id]
    published: list = []
    unsub = coordinator.async_add_listener(
        lambda: published.append((coordinator.data.position, coordinator.data.display))
    )
    sample = PositionSample(
        latitude=3.0,
        longitude=4.0,
        source=ProviderIdentity.NETWORK,
        timestamp=dt_util.utcnow(),
    )

    coordinator.router.route(ProviderIdentity.NETWORK, PositionUpdated(sample))
    unsub()

    assert published == [(sample, "3.0 4.0")]


async def test_background_clears_failures(
    hass: HomeAssistant, enable_custom_integrations
) -> None:
    entry = await _setup(hass, **{CONF_NETWORK_ENTITY: NETWORK_SOURCE})
    coordinator = hass.data[DOMAIN][entry.entry_id]
    assert ProviderIdentity.SATELLITE in coordinator.data.failures

    coordinator.async_background()
    await hass.async_block_till_done()

    assert coordinator.data.failures == {}
    satellite = hass.states.get(_entity_id(hass, "binary_sensor", entry, "satellite_enabled"))
    assert satellite.state != STATE_OFF
