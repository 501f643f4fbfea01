"""Position providers for the Location Tracking integration."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
import logging

from homeassistant.const import ATTR_LATITUDE, ATTR_LONGITUDE, STATE_UNAVAILABLE
from homeassistant.core import (
    CALLBACK_TYPE,
    Event,
    EventStateChangedData,
    HomeAssistant,
    State,
    callback,
    valid_entity_id,
)
from homeassistant.helpers.event import async_track_state_change_event
from homeassistant.util import location as location_util

from .const import ATTR_ALTITUDE, ATTR_BEARING, ATTR_COURSE
from .models import (
    AvailabilityChanged,
    PositionSample,
    PositionUpdated,
    ProviderEvent,
    ProviderIdentity,
    ProviderStatus,
    StatusChanged,
    SubscriptionConfig,
)

_LOGGER = logging.getLogger(__name__)

EventListener = Callable[[ProviderEvent], None]


class LocationTrackingError(Exception):
    """General Location Tracking error."""


class ProviderUnavailable(LocationTrackingError):
    """The provider's source cannot be reached at all."""

    def __init__(self, identity: ProviderIdentity, reason: str) -> None:
        super().__init__(f"Provider {identity} unavailable: {reason}")
        self.identity = identity
        self.reason = reason


class ProviderHandle(ABC):
    """One position source.

    Implementations deliver events to the listener passed to subscribe()
    from whatever context they run in, at any time after a successful
    subscribe and until unsubscribe() returns.
    """

    def __init__(self, identity: ProviderIdentity) -> None:
        self.identity = identity

    @abstractmethod
    def subscribe(self, config: SubscriptionConfig, listener: EventListener) -> None:
        """Start delivering events.

        Subscribing again replaces the config and listener without opening
        a second delivery stream. Raises ProviderUnavailable.
        """

    @abstractmethod
    def unsubscribe(self) -> None:
        """Stop delivering events. No-op when not subscribed."""

    @property
    @abstractmethod
    def subscribed(self) -> bool:
        """Return True while a delivery stream is open."""


class EntityProviderHandle(ProviderHandle):
    """Provider backed by a Home Assistant entity with GPS attributes."""

    def __init__(
        self,
        hass: HomeAssistant,
        identity: ProviderIdentity,
        entity_id: str | None,
    ) -> None:
        """Initialize the provider."""
        super().__init__(identity)
        self._hass = hass
        self.entity_id = entity_id
        self._config: SubscriptionConfig | None = None
        self._listener: EventListener | None = None
        self._unsub_track: CALLBACK_TYPE | None = None
        self._initial: asyncio.Handle | None = None
        self._status: ProviderStatus | None = None
        self._last_fix: PositionSample | None = None

    @property
    def subscribed(self) -> bool:
        return self._unsub_track is not None

    @callback
    def subscribe(self, config: SubscriptionConfig, listener: EventListener) -> None:
        if not self.entity_id:
            raise ProviderUnavailable(self.identity, "no source entity configured")
        if not valid_entity_id(self.entity_id):
            raise ProviderUnavailable(
                self.identity, f"invalid source entity {self.entity_id!r}"
            )

        self._config = config
        self._listener = listener
        if self._unsub_track is not None:
            _LOGGER.debug("Refreshed %s subscription on %s", self.identity, self.entity_id)
            return

        self._status = None
        self._last_fix = None
        self._unsub_track = async_track_state_change_event(
            self._hass, [self.entity_id], self._async_state_changed
        )
        self._initial = self._hass.loop.call_soon(self._async_emit_current)
        _LOGGER.debug("Subscribed %s to %s", self.identity, self.entity_id)

    @callback
    def unsubscribe(self) -> None:
        if self._unsub_track is None:
            return
        self._unsub_track()
        self._unsub_track = None
        if self._initial is not None:
            self._initial.cancel()
            self._initial = None
        self._listener = None
        _LOGGER.debug("Unsubscribed %s from %s", self.identity, self.entity_id)

    @callback
    def _async_emit_current(self) -> None:
        self._initial = None
        if (state := self._hass.states.get(self.entity_id)) is None:
            self._emit(AvailabilityChanged(self.identity, False))
            return
        self._emit(AvailabilityChanged(self.identity, True))
        self._process_state(state, initial=True)

    @callback
    def _async_state_changed(self, event: Event[EventStateChangedData]) -> None:
        old_state = event.data["old_state"]
        new_state = event.data["new_state"]

        if new_state is None:
            self._emit(AvailabilityChanged(self.identity, False))
            return
        if old_state is None:
            self._emit(AvailabilityChanged(self.identity, True))
        self._process_state(new_state)

    def _process_state(self, state: State, initial: bool = False) -> None:
        sample = None
        if state.state == STATE_UNAVAILABLE:
            status = ProviderStatus.TEMPORARILY_UNAVAILABLE
        elif (sample := self._sample_from_state(state)) is None:
            status = ProviderStatus.OUT_OF_SERVICE
        else:
            status = ProviderStatus.AVAILABLE

        # A fresh subscription always reports its status; later a first
        # Available seen from a state change is nominal and stays silent.
        if initial or (
            status != self._status
            and (self._status is not None or status != ProviderStatus.AVAILABLE)
        ):
            self._emit(StatusChanged(self.identity, status.value))
        self._status = status

        if sample is not None and self._passes_thresholds(sample):
            self._last_fix = sample
            self._emit(PositionUpdated(sample))

    def _sample_from_state(self, state: State) -> PositionSample | None:
        attrs = state.attributes
        try:
            latitude = float(attrs[ATTR_LATITUDE])
            longitude = float(attrs[ATTR_LONGITUDE])
        except (KeyError, ValueError, TypeError):
            return None

        return PositionSample(
            latitude=latitude,
            longitude=longitude,
            source=self.identity,
            timestamp=state.last_updated,
            altitude=_optional_float(attrs.get(ATTR_ALTITUDE)),
            bearing=_optional_float(attrs.get(ATTR_BEARING, attrs.get(ATTR_COURSE))),
        )

    def _passes_thresholds(self, sample: PositionSample) -> bool:
        last = self._last_fix
        if last is None or self._config is None:
            return True

        elapsed_ms = (sample.timestamp - last.timestamp).total_seconds() * 1000
        if elapsed_ms < self._config.min_interval_ms:
            return False

        moved = location_util.distance(
            last.latitude, last.longitude, sample.latitude, sample.longitude
        )
        return moved is None or moved >= self._config.min_displacement_m

    def _emit(self, event: ProviderEvent) -> None:
        if self._listener is not None:
            self._listener(event)


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None
