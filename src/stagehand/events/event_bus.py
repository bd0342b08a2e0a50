from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Tuple

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class _NoPayload:
    """Marker for channels published without a value."""

    _instance = None

    def __new__(cls) -> "_NoPayload":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return "NO_PAYLOAD"


NO_PAYLOAD = _NoPayload()


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class Subscription:
    """Handle for one (channel, handler) registration.

    Releasing is idempotent, so owners can close it on every teardown path
    without tracking whether it already happened. Subscribing the same handler
    to the same channel again returns this handle, so its holders share one
    release. Also usable as a context
    manager for subscriptions scoped to a block.
    """

    def __init__(self, bus: "EventBus", channel: str, handler: Handler) -> None:
        self.bus = bus
        self.channel = channel
        self.handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def close(self) -> None:
        if not self._active:
            return
        self._active = False
        self.bus.unsubscribe(self.channel, self.handler)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        state = "active" if self._active else "released"
        return f"<Subscription channel={self.channel!r} handler={_handler_name(self.handler)} {state}>"


class EventBus:
    """Synchronous publish/subscribe bus with named channels.

    Handlers are invoked in subscription order on the publishing call stack.
    A handler is registered at most once per channel: subscribing it again
    returns the Subscription that already holds it, so every holder shares one
    release. Each dispatch iterates over a snapshot of the registrations:
    handlers added while a publish is in flight are first called on the next
    publish, and removing handlers mid-dispatch is safe.

    Publishing while the bus is held (see :meth:`hold`) queues the delivery
    until the outermost hold is released.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._hold_depth = 0
        self._pending: List[Tuple[str, Any]] = []

    def subscribe(self, channel: str, handler: Handler) -> Subscription:
        """Subscribe a handler to a channel.

        Args:
            channel: Channel name.
            handler: Callable taking the payload, or no arguments for channels
                published without one.

        Returns:
            The Subscription for this (channel, handler) pair. Subscribing a
            handler that is already registered returns the existing handle.
        """
        if not channel:
            raise ValueError("channel must be a non-empty string")
        if not callable(handler):
            raise TypeError("handler must be callable")
        subscriptions = self._subscriptions.setdefault(channel, [])
        for subscription in subscriptions:
            if subscription.handler == handler:
                return subscription
        subscription = Subscription(self, channel, handler)
        subscriptions.append(subscription)
        logger.debug("Subscribed %s to '%s'", _handler_name(handler), channel)
        return subscription

    def unsubscribe(self, channel: str, handler: Handler) -> None:
        """Remove a handler from a channel. Unknown handlers are ignored."""
        subscriptions = self._subscriptions.get(channel)
        if not subscriptions:
            return
        for subscription in subscriptions:
            if subscription.handler == handler:
                break
        else:
            return
        subscriptions.remove(subscription)
        subscription._active = False
        logger.debug("Unsubscribed %s from '%s'", _handler_name(handler), channel)
        if not subscriptions:
            del self._subscriptions[channel]

    def publish(self, channel: str, payload: Any = NO_PAYLOAD) -> None:
        """Deliver a payload to every handler currently subscribed to a channel.

        Never raises because of a handler: faults are logged and the remaining
        handlers still run.
        """
        if self._hold_depth > 0:
            logger.debug("Deferring '%s' until the bus is released", channel)
            self._pending.append((channel, payload))
            return
        self._dispatch(channel, payload)

    def _dispatch(self, channel: str, payload: Any) -> None:
        handlers = [s.handler for s in self._subscriptions.get(channel, ())]
        if not handlers:
            logger.debug("Dropping '%s'; no subscribers", channel)
            return
        logger.debug("Publishing '%s' to %d handlers", channel, len(handlers))
        for handler in handlers:
            try:
                if payload is NO_PAYLOAD:
                    handler()
                else:
                    handler(payload)
            except Exception:
                logger.exception("Unhandled exception in handler %s for '%s'", _handler_name(handler), channel)

    @contextmanager
    def hold(self) -> Iterator["EventBus"]:
        """Defer publishes made inside the block until the outermost hold exits."""
        self._hold_depth += 1
        try:
            yield self
        finally:
            self._hold_depth -= 1
            if self._hold_depth == 0:
                self._flush()

    @property
    def held(self) -> bool:
        return self._hold_depth > 0

    def _flush(self) -> None:
        while self._pending and self._hold_depth == 0:
            channel, payload = self._pending.pop(0)
            self._dispatch(channel, payload)

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscriptions.get(channel, ()))

    def is_subscribed(self, channel: str, handler: Handler) -> bool:
        return any(s.handler == handler for s in self._subscriptions.get(channel, ()))

    def clear(self) -> None:
        """Drop every handler and any deferred deliveries (session teardown)."""
        count = 0
        for subscriptions in self._subscriptions.values():
            for subscription in subscriptions:
                subscription._active = False
                count += 1
        self._subscriptions.clear()
        self._pending.clear()
        logger.debug("Cleared %d handler registrations", count)
