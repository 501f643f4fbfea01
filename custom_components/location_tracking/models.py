"""Data models for the Location Tracking integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum, StrEnum
from typing import Any


class ProviderIdentity(StrEnum):
    """Known position sources."""

    NETWORK = "network"
    SATELLITE = "gps"


class ProviderStatus(IntEnum):
    """Provider status codes."""

    OUT_OF_SERVICE = 0
    TEMPORARILY_UNAVAILABLE = 1
    AVAILABLE = 2


@dataclass(frozen=True)
class UnknownStatus:
    """A status code no ProviderStatus member matches."""

    raw_value: Any


@dataclass(frozen=True)
class SubscriptionConfig:
    """Minimum update interval and displacement for one provider."""

    min_interval_ms: int
    min_displacement_m: float

    def __post_init__(self) -> None:
        if self.min_interval_ms < 0:
            raise ValueError(f"min_interval_ms must be >= 0, got {self.min_interval_ms}")
        if self.min_displacement_m < 0:
            raise ValueError(
                f"min_displacement_m must be >= 0, got {self.min_displacement_m}"
            )


@dataclass(frozen=True)
class PositionSample:
    """A single fix reported by a provider."""

    latitude: float
    longitude: float
    source: ProviderIdentity
    timestamp: datetime
    altitude: float | None = None
    bearing: float | None = None

    @property
    def has_altitude(self) -> bool:
        return self.altitude is not None

    @property
    def has_bearing(self) -> bool:
        return self.bearing is not None


def format_position(sample: PositionSample) -> str:
    """Render a sample the way the display sink expects it."""
    return f"{sample.latitude} {sample.longitude}"


@dataclass(frozen=True)
class PositionUpdated:
    """Provider reported a new fix."""

    sample: PositionSample


@dataclass(frozen=True)
class StatusChanged:
    """Provider status changed; status is the raw code from the source."""

    identity: ProviderIdentity
    status: Any


@dataclass(frozen=True)
class AvailabilityChanged:
    """Provider was enabled or disabled at the source."""

    identity: ProviderIdentity
    enabled: bool


ProviderEvent = PositionUpdated | StatusChanged | AvailabilityChanged


@dataclass(frozen=True)
class MalformedEvent:
    """Diagnostic wrapper for an event the router could not classify."""

    identity: ProviderIdentity
    raw: Any
    reason: str


@dataclass
class LocationTrackingData:
    """Consolidated state published by the coordinator."""

    position: PositionSample | None = None
    display: str | None = None
    samples: dict[ProviderIdentity, PositionSample] = field(default_factory=dict)
    statuses: dict[ProviderIdentity, ProviderStatus | UnknownStatus] = field(
        default_factory=dict
    )
    enabled: dict[ProviderIdentity, bool] = field(default_factory=dict)
    failures: dict[ProviderIdentity, str] = field(default_factory=dict)
    tracking: bool = False
