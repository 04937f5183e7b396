"""
Change Signal

A payload-free broadcast meaning "something in the store changed,
re-read everything". Owned by the RecordStore; views subscribe on mount
and close their Subscription on teardown.
"""

from typing import Callable, Optional

from guideos.activity import ActivityLogger, get_activity_logger
from guideos.models.activity import ActivityEventBuilder


Listener = Callable[[], None]


class Subscription:
    """Handle returned by ChangeSignal.subscribe."""

    def __init__(self, signal: "ChangeSignal", listener: Listener):
        self._signal = signal
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    @property
    def listener(self) -> Listener:
        return self._listener

    def close(self) -> None:
        """Stop receiving notifications. Safe to call more than once."""
        if self._active:
            self._active = False
            self._signal.release(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ChangeSignal:
    """
    Broadcasts to every subscribed listener, in subscription order.

    Listeners take no arguments: the signal never says what changed.
    Subscribing the same callable twice registers it once and returns the
    same Subscription.
    """

    def __init__(self, activity_logger: Optional[ActivityLogger] = None):
        self._listeners: list[Listener] = []
        self._handles: dict[Listener, Subscription] = {}
        self._activity = activity_logger or get_activity_logger()

    def subscribe(self, listener: Listener) -> Subscription:
        handle = self._handles.get(listener)
        if handle is None:
            self._listeners.append(listener)
            handle = self._handles[listener] = Subscription(self, listener)
        return handle

    def unsubscribe(self, listener: Listener) -> bool:
        """Remove `listener`; returns False if it was not subscribed."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        self._handles.pop(listener, None)
        return True

    def release(self, handle: Subscription) -> None:
        """Unsubscribe `handle`'s listener unless a newer handle owns it."""
        if self._handles.get(handle.listener) is handle:
            self.unsubscribe(handle.listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self) -> None:
        """
        Notify all listeners.

        Works on a snapshot, so listeners added or removed while emitting
        take effect from the next emit. A listener that raises is logged
        and skipped; the rest still run.
        """
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                self._activity.log(
                    ActivityEventBuilder.listener_failed(
                        listener=getattr(listener, "__qualname__", repr(listener)),
                        error_message=str(e),
                    )
                )
