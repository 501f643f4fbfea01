"""Subscription lifecycle for position providers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
import logging
import threading

from .models import ProviderEvent, ProviderIdentity, SubscriptionConfig
from .provider import EventListener, ProviderHandle, ProviderUnavailable
from .router import EventRouter

_LOGGER = logging.getLogger(__name__)


class SubscriptionState(StrEnum):
    """Subscription state of one provider."""

    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"
    FAILED = "failed"


@dataclass
class _Subscription:
    handle: ProviderHandle
    config: SubscriptionConfig
    state: SubscriptionState = SubscriptionState.UNSUBSCRIBED
    generation: int = 0
    failure: ProviderUnavailable | None = None


class SubscriptionManager:
    """Single source of truth for which providers are active.

    All reads and writes of the subscription set, and every dispatch into the
    router, happen under one re-entrant lock. Once stop() returns no further
    event reaches the router, including events a provider had already queued.
    """

    def __init__(
        self,
        providers: Iterable[tuple[ProviderHandle, SubscriptionConfig]],
        router: EventRouter,
    ) -> None:
        """Initialize the manager."""
        self._router = router
        self._lock = threading.RLock()
        self._subscriptions: dict[ProviderIdentity, _Subscription] = {}
        for handle, config in providers:
            if handle.identity in self._subscriptions:
                raise ValueError(f"Duplicate provider {handle.identity}")
            self._subscriptions[handle.identity] = _Subscription(handle, config)

    @property
    def active_providers(self) -> frozenset[ProviderIdentity]:
        """Return the providers that are currently subscribed."""
        with self._lock:
            return frozenset(
                identity
                for identity, sub in self._subscriptions.items()
                if sub.state is SubscriptionState.SUBSCRIBED
            )

    def state(self, identity: ProviderIdentity) -> SubscriptionState:
        """Return the subscription state of one provider."""
        with self._lock:
            return self._subscriptions[identity].state

    def snapshot(self) -> dict[ProviderIdentity, SubscriptionState]:
        """Return the state of every configured provider."""
        with self._lock:
            return {identity: sub.state for identity, sub in self._subscriptions.items()}

    def start(self) -> dict[ProviderIdentity, ProviderUnavailable]:
        """Subscribe every configured provider.

        Providers already subscribed are refreshed in place. Returns the
        providers whose subscribe failed; the others stay active.
        """
        failures: dict[ProviderIdentity, ProviderUnavailable] = {}
        with self._lock:
            for identity, sub in self._subscriptions.items():
                refresh = sub.state is SubscriptionState.SUBSCRIBED
                generation = sub.generation + 1
                try:
                    sub.handle.subscribe(sub.config, self._listener(identity, generation))
                except ProviderUnavailable as err:
                    _LOGGER.warning("Unable to subscribe %s: %s", identity, err)
                    failures[identity] = self._mark_failed(sub, err, refresh)
                    continue
                except Exception as err:
                    _LOGGER.exception("Error subscribing %s", identity)
                    failures[identity] = self._mark_failed(
                        sub, ProviderUnavailable(identity, str(err)), refresh
                    )
                    continue

                sub.generation = generation
                sub.state = SubscriptionState.SUBSCRIBED
                sub.failure = None
                _LOGGER.debug(
                    "%s %s (generation %s)",
                    "Refreshed" if refresh else "Subscribed",
                    identity,
                    generation,
                )
        return failures

    def stop(self) -> None:
        """Unsubscribe every provider."""
        with self._lock:
            for identity, sub in self._subscriptions.items():
                if sub.state is SubscriptionState.SUBSCRIBED:
                    self._release(sub)
                    _LOGGER.debug("Unsubscribed %s", identity)
                sub.state = SubscriptionState.UNSUBSCRIBED
                sub.failure = None

    def on_foreground(self) -> dict[ProviderIdentity, ProviderUnavailable]:
        """Handle the host moving to the foreground."""
        return self.start()

    def on_background(self) -> None:
        """Handle the host moving to the background."""
        self.stop()

    def _mark_failed(
        self, sub: _Subscription, err: ProviderUnavailable, refresh: bool
    ) -> ProviderUnavailable:
        if refresh:
            self._release(sub)
        sub.state = SubscriptionState.FAILED
        sub.failure = err
        return err

    def _release(self, sub: _Subscription) -> None:
        try:
            sub.handle.unsubscribe()
        except Exception:
            _LOGGER.exception("Error unsubscribing %s", sub.handle.identity)

    def _listener(self, identity: ProviderIdentity, generation: int) -> EventListener:
        def _deliver(event: ProviderEvent) -> None:
            self._dispatch(identity, generation, event)

        return _deliver

    def _dispatch(
        self, identity: ProviderIdentity, generation: int, event: ProviderEvent
    ) -> None:
        with self._lock:
            sub = self._subscriptions[identity]
            if sub.state is not SubscriptionState.SUBSCRIBED or sub.generation != generation:
                _LOGGER.debug("Discarding event from inactive provider %s: %s", identity, event)
                return
            self._router.route(identity, event)
