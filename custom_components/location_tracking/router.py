"""Classify provider events and dispatch them to callbacks."""

from __future__ import annotations

from collections.abc import Callable
import logging
import math
from typing import Any

from .const import LOG_TAG
from .models import (
    AvailabilityChanged,
    MalformedEvent,
    PositionSample,
    PositionUpdated,
    ProviderIdentity,
    ProviderStatus,
    StatusChanged,
    UnknownStatus,
    format_position,
)

_LOGGER = logging.getLogger(__name__)
_LOCATION_LOGGER = _LOGGER.getChild(LOG_TAG)

_STATUS_MESSAGES = {
    ProviderStatus.AVAILABLE: "Provider Available",
    ProviderStatus.TEMPORARILY_UNAVAILABLE: "Provider Temporarily Unavailable",
    ProviderStatus.OUT_OF_SERVICE: "Provider Out of Service",
}

PositionCallback = Callable[[PositionSample], None]
StatusCallback = Callable[[ProviderIdentity, ProviderStatus | UnknownStatus], None]
AvailabilityCallback = Callable[[ProviderIdentity, bool], None]
DiagnosticCallback = Callable[[ProviderIdentity, MalformedEvent], None]
DisplaySink = Callable[[str], None]


def parse_status(raw: Any) -> ProviderStatus | UnknownStatus:
    """Map a raw status code to a ProviderStatus, or wrap it as unknown."""
    if isinstance(raw, ProviderStatus):
        return raw
    if isinstance(raw, bool) or not isinstance(raw, int):
        return UnknownStatus(raw)
    try:
        return ProviderStatus(raw)
    except ValueError:
        return UnknownStatus(raw)


class EventRouter:
    """Route each provider event to exactly one callback contract.

    Routing is a pure function of the event kind. Position fixes are the only
    events that reach the display sink. Anything the router does not
    recognize is wrapped in a MalformedEvent and handed to on_diagnostic.
    Callback errors are logged and never propagate to the provider.
    """

    def __init__(
        self,
        on_position_changed: PositionCallback | None = None,
        on_provider_status_changed: StatusCallback | None = None,
        on_provider_availability_changed: AvailabilityCallback | None = None,
        on_diagnostic: DiagnosticCallback | None = None,
        display_sink: DisplaySink | None = None,
    ) -> None:
        """Initialize the router."""
        self._on_position_changed = on_position_changed
        self._on_provider_status_changed = on_provider_status_changed
        self._on_provider_availability_changed = on_provider_availability_changed
        self._on_diagnostic = on_diagnostic
        self._display_sink = display_sink

    def route(self, identity: ProviderIdentity, event: Any) -> None:
        """Dispatch one event received from the provider `identity`."""
        if isinstance(event, PositionUpdated):
            self._route_position(identity, event)
        elif isinstance(event, StatusChanged):
            self._route_status(identity, event)
        elif isinstance(event, AvailabilityChanged):
            self._route_availability(identity, event)
        else:
            self._route_malformed(
                MalformedEvent(identity, event, f"unrecognized event {type(event).__name__}")
            )

    def _route_position(self, identity: ProviderIdentity, event: PositionUpdated) -> None:
        sample = event.sample
        if not isinstance(sample, PositionSample):
            self._route_malformed(MalformedEvent(identity, event, "position payload is not a sample"))
            return
        if not _valid_coordinates(sample.latitude, sample.longitude):
            self._route_malformed(MalformedEvent(identity, event, "coordinates out of range"))
            return

        _LOCATION_LOGGER.debug(
            "Altitude %s Supported: %s", sample.altitude, sample.has_altitude
        )
        _LOCATION_LOGGER.debug("Bearing %s Supported: %s", sample.bearing, sample.has_bearing)
        _LOCATION_LOGGER.debug(
            "onLocationChanged: lat=%s, lon=%s", sample.latitude, sample.longitude
        )
        self._invoke(self._on_position_changed, sample)
        self._invoke(self._display_sink, format_position(sample))

    def _route_status(self, identity: ProviderIdentity, event: StatusChanged) -> None:
        status = parse_status(event.status)
        _LOCATION_LOGGER.debug("onStatusChanged: %s status:%s", identity, event.status)
        if isinstance(status, UnknownStatus):
            _LOCATION_LOGGER.debug("Provider status unknown: %r", status.raw_value)
        else:
            _LOCATION_LOGGER.debug(_STATUS_MESSAGES[status])
        self._invoke(self._on_provider_status_changed, identity, status)

    def _route_availability(
        self, identity: ProviderIdentity, event: AvailabilityChanged
    ) -> None:
        if not isinstance(event.enabled, bool):
            self._route_malformed(MalformedEvent(identity, event, "availability is not a bool"))
            return
        if event.enabled:
            _LOCATION_LOGGER.debug("onProviderEnabled: %s", identity)
        else:
            _LOCATION_LOGGER.debug("onProviderDisabled: %s", identity)
        self._invoke(self._on_provider_availability_changed, identity, event.enabled)

    def _route_malformed(self, malformed: MalformedEvent) -> None:
        _LOCATION_LOGGER.debug(
            "Malformed event from %s: %s (%r)",
            malformed.identity,
            malformed.reason,
            malformed.raw,
        )
        self._invoke(self._on_diagnostic, malformed.identity, malformed)

    def _invoke(self, target: Callable[..., None] | None, *args: Any) -> None:
        if target is None:
            return
        try:
            target(*args)
        except Exception:
            _LOGGER.exception("Error in location callback %s", getattr(target, "__name__", target))


def _valid_coordinates(latitude: Any, longitude: Any) -> bool:
    if not isinstance(latitude, (int, float)) or not isinstance(longitude, (int, float)):
        return False
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0
