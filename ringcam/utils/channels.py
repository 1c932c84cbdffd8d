# ringcam/utils/channels.py
"""
Broadcast channels used to publish camera state.

Channel        — plain broadcast, subscribers only see emissions made after they subscribe.
ReplayChannel  — holds the latest value; a new subscriber is handed it immediately,
                 then receives every later emission. With distinct=True an emission
                 equal to the held value is dropped.

Delivery is synchronous and in emission order. A listener that raises is logged
and skipped; the remaining listeners still receive the value.
"""

import asyncio
from typing import Any, Callable, Generic, Optional, TypeVar

from ringcam.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
Listener = Callable[[T], Any]


class Subscription:
    """Handle returned by subscribe(). unsubscribe() is safe to call more than once."""

    def __init__(self, channel: "Channel", listener: Listener):
        self._channel = channel
        self._listener = listener
        self.closed = False

    def unsubscribe(self):
        if self.closed:
            return
        self.closed = True
        self._channel._remove(self._listener)


class Channel(Generic[T]):
    def __init__(self, name: str = ""):
        self.name = name
        self._listeners: list[Listener] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def emit(self, value: T = None):
        # Copy so listeners may (un)subscribe while being notified
        for listener in list(self._listeners):
            self._deliver(listener, value)

    def next_matching(self, predicate: Optional[Callable[[T], bool]] = None) -> "asyncio.Future[T]":
        """
        Future resolved with the first value (emitted from now on) that satisfies
        predicate. Exactly one value is consumed; the listener is removed as soon
        as the future is done, including when the caller cancels it.
        """
        future = asyncio.get_running_loop().create_future()

        def _on_value(value):
            if future.done():
                return
            if predicate is None or predicate(value):
                future.set_result(value)

        subscription = self.subscribe(_on_value)
        future.add_done_callback(lambda _: subscription.unsubscribe())
        return future

    def _remove(self, listener: Listener):
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _deliver(self, listener: Listener, value: T):
        try:
            listener(value)
        except Exception as e:
            logger.error(f"[CHANNEL] Listener on '{self.name}' failed: {e}", exc_info=True)


class ReplayChannel(Channel[T]):
    def __init__(self, initial: T, name: str = "", distinct: bool = False):
        super().__init__(name)
        self._value = initial
        self._distinct = distinct

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Listener) -> Subscription:
        self._deliver(listener, self._value)
        return super().subscribe(listener)

    def emit(self, value: T = None) -> bool:
        """Store and broadcast value. Returns False when a distinct channel drops it."""
        if self._distinct and value == self._value:
            return False
        self._value = value
        super().emit(value)
        return True
