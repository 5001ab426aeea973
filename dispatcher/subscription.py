"""Named callback registration against a feed."""

import threading
from typing import Callable, Generic, TypeVar

from dispatcher.feed_item import FeedItem

T = TypeVar("T")

OnNewItem = Callable[[FeedItem[T]], None]


class Subscription(Generic[T]):
    """A subscriber name bound to the callback it registered."""

    def __init__(self, name: str, callback: OnNewItem[T]) -> None:
        if not callable(callback):
            raise TypeError(f"callback for subscriber {name!r} is not callable")
        self._name = name
        self._callback = callback
        self._delivered = 0
        self._delivered_lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def callback(self) -> OnNewItem[T]:
        return self._callback

    @property
    def delivered(self) -> int:
        """Number of items this callback handled without raising."""
        with self._delivered_lock:
            return self._delivered

    def deliver(self, item: FeedItem[T]) -> None:
        """Invoke the callback; exceptions propagate to the feed."""
        self._callback(item)
        # concurrent publishes on one feed deliver to the same subscription
        with self._delivered_lock:
            self._delivered += 1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, delivered={self.delivered})"
