"""Fixtures for Location Tracking tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import pytest

from custom_components.location_tracking.const import (
    NETWORK_MIN_DISPLACEMENT_M,
    NETWORK_MIN_INTERVAL_MS,
    SATELLITE_MIN_DISPLACEMENT_M,
    SATELLITE_MIN_INTERVAL_MS,
)
from custom_components.location_tracking.models import (
    PositionSample,
    PositionUpdated,
    ProviderIdentity,
    SubscriptionConfig,
)
from custom_components.location_tracking.provider import (
    ProviderHandle,
    ProviderUnavailable,
)
from custom_components.location_tracking.router import EventRouter


class FakeProviderHandle(ProviderHandle):
    """Provider whose events are pushed by the test."""

    def __init__(self, identity: ProviderIdentity, fail: bool = False) -> None:
        super().__init__(identity)
        self.fail = fail
        self.config: SubscriptionConfig | None = None
        self.subscribe_calls = 0
        self.unsubscribe_calls = 0
        self.listeners: list = []
        self._listener = None

    @property
    def subscribed(self) -> bool:
        return self._listener is not None

    def subscribe(self, config, listener) -> None:
        self.subscribe_calls += 1
        if self.fail:
            raise ProviderUnavailable(self.identity, "permission denied")
        self.config = config
        self._listener = listener
        self.listeners.append(listener)

    def unsubscribe(self) -> None:
        if self._listener is None:
            return
        self.unsubscribe_calls += 1
        self._listener = None

    def push(self, event: Any) -> None:
        """Deliver an event on the live stream, if any."""
        if self._listener is not None:
            self._listener(event)

    def push_queued(self, event: Any) -> None:
        """Deliver an event on every stream ever opened, live or not."""
        for listener in self.listeners:
            listener(event)


@dataclass
class Recorder:
    """Collect every callback the router makes."""

    positions: list = field(default_factory=list)
    statuses: list = field(default_factory=list)
    availability: list = field(default_factory=list)
    diagnostics: list = field(default_factory=list)
    display: list = field(default_factory=list)

    def router(self) -> EventRouter:
        return EventRouter(
            on_position_changed=self.positions.append,
            on_provider_status_changed=lambda i, s: self.statuses.append((i, s)),
            on_provider_availability_changed=lambda i, e: self.availability.append((i, e)),
            on_diagnostic=lambda i, m: self.diagnostics.append((i, m)),
            display_sink=self.display.append,
        )


def make_sample(
    latitude: float,
    longitude: float,
    source: ProviderIdentity = ProviderIdentity.NETWORK,
    **kwargs: Any,
) -> PositionSample:
    return PositionSample(
        latitude=latitude,
        longitude=longitude,
        source=source,
        timestamp=datetime(2024, 1, 1, tzinfo=UTC),
        **kwargs,
    )


def position(latitude: float, longitude: float, source=ProviderIdentity.NETWORK):
    return PositionUpdated(make_sample(latitude, longitude, source))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def network() -> FakeProviderHandle:
    return FakeProviderHandle(ProviderIdentity.NETWORK)


@pytest.fixture
def satellite() -> FakeProviderHandle:
    return FakeProviderHandle(ProviderIdentity.SATELLITE)


@pytest.fixture
def provider_configs(network, satellite):
    return [
        (network, SubscriptionConfig(NETWORK_MIN_INTERVAL_MS, NETWORK_MIN_DISPLACEMENT_M)),
        (
            satellite,
            SubscriptionConfig(SATELLITE_MIN_INTERVAL_MS, SATELLITE_MIN_DISPLACEMENT_M),
        ),
    ]
