"""Feed: one named channel holding subscriber callbacks and a bounded item history."""

import threading
from collections import deque
from typing import Any, Deque, Dict, Generic, List, Optional, Tuple, TypeVar

from dispatcher.config import DEFAULT_HISTORY_SIZE
from dispatcher.errors import DeliveryError, SubscriberFailure
from dispatcher.feed_item import FeedItem
from dispatcher.observability import Metrics, get_logger
from dispatcher.subscription import OnNewItem, Subscription

T = TypeVar("T")


class Feed(Generic[T]):
    """
    In-memory feed; publishes items synchronously to every subscriber in
    registration order and keeps the last `history_size` items.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        raise_delivery_errors: bool = True,
        log_level: Any = "INFO",
        metrics: Optional[Metrics] = None,
    ) -> None:
        if history_size < 0:
            raise ValueError(f"history_size must be >= 0, got {history_size}")
        self._name = name
        self._raise_delivery_errors = raise_delivery_errors
        # dict keeps insertion order, which is the delivery order
        self._listeners: Dict[str, Subscription[T]] = {}
        self._listeners_lock = threading.Lock()
        self._history: Deque[FeedItem[T]] = deque(maxlen=history_size)
        self._history_lock = threading.Lock()
        self._items_published = 0
        self._delivery_failures = 0
        self._metrics = metrics
        logger_name = f"dispatcher.feed.{name}" if name else "dispatcher.feed.<anonymous>"
        self._logger = get_logger(logger_name, log_level)

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def history_size(self) -> int:
        return self._history.maxlen or 0

    @property
    def subscriber_count(self) -> int:
        with self._listeners_lock:
            return len(self._listeners)

    @property
    def subscriber_names(self) -> List[str]:
        """Subscriber names in delivery order."""
        with self._listeners_lock:
            return list(self._listeners)

    @property
    def items_published(self) -> int:
        """Total items published, including those evicted from history."""
        with self._history_lock:
            return self._items_published

    @property
    def delivery_failures(self) -> int:
        """Total callback invocations that raised."""
        with self._history_lock:
            return self._delivery_failures

    @property
    def items(self) -> Tuple[FeedItem[T], ...]:
        """Retained items, oldest first."""
        with self._history_lock:
            return tuple(self._history)

    @property
    def last_item(self) -> Optional[FeedItem[T]]:
        with self._history_lock:
            return self._history[-1] if self._history else None

    def has_subscriber(self, subscriber_name: str) -> bool:
        with self._listeners_lock:
            return subscriber_name in self._listeners

    def subscribe(self, subscriber_name: str, callback: OnNewItem[T]) -> bool:
        """
        Register `callback` under `subscriber_name`.
        The first registration for a name wins; returns False if the name was taken.
        """
        subscription = Subscription(subscriber_name, callback)
        with self._listeners_lock:
            if subscriber_name in self._listeners:
                added = False
            else:
                self._listeners[subscriber_name] = subscription
                added = True
        if added:
            self._logger.info(
                "subscribed",
                extra={"feed": self._name, "subscriber": subscriber_name},
            )
        else:
            self._logger.debug(
                "already_subscribed",
                extra={"feed": self._name, "subscriber": subscriber_name},
            )
        return added

    def unsubscribe(self, subscriber_name: str) -> bool:
        """Remove the registration for `subscriber_name`; returns False if there was none."""
        with self._listeners_lock:
            removed = self._listeners.pop(subscriber_name, None) is not None
        if removed:
            self._logger.info(
                "unsubscribed",
                extra={"feed": self._name, "subscriber": subscriber_name},
            )
        return removed

    def publish(self, value: T) -> FeedItem[T]:
        """
        Record `value` as a new item and hand it to every subscriber.
        Listener set is copied under lock, then callbacks run without holding it.
        Failing callbacks do not stop the others; they are collected and raised
        together as DeliveryError once every subscriber has been notified.
        """
        with self._history_lock:
            self._items_published += 1
            item = FeedItem(
                value=value,
                feed_name=self._name,
                item_id=f"{self._name or 'feed'}:{self._items_published}",
            )
            self._history.append(item)
        if self._metrics is not None:
            self._metrics.increment("items_published")
        with self._listeners_lock:
            subscriptions = list(self._listeners.values())
        self._logger.info(
            "publishing",
            extra={
                "feed": self._name,
                "item_id": item.item_id,
                "subscriber_count": len(subscriptions),
            },
        )
        failures: List[SubscriberFailure] = []
        for subscription in subscriptions:
            try:
                subscription.deliver(item)
            except Exception as e:
                self._logger.exception(
                    "delivery_failed",
                    extra={
                        "feed": self._name,
                        "subscriber": subscription.name,
                        "item_id": item.item_id,
                        "error": str(e),
                    },
                )
                failures.append(SubscriberFailure(subscription.name, e))
        if failures:
            with self._history_lock:
                self._delivery_failures += len(failures)
            if self._metrics is not None:
                self._metrics.increment("delivery_failures", len(failures))
        if failures and self._raise_delivery_errors:
            raise DeliveryError(self._name, item, failures)
        return item

    def get_last_n(self, n: int) -> List[FeedItem[T]]:
        """Return up to the last n retained items, oldest first."""
        if n <= 0:
            return []
        with self._history_lock:
            buf = list(self._history)
        return buf[-n:]

    def __repr__(self) -> str:
        return (
            f"Feed(name={self._name!r}, subscribers={self.subscriber_count}, "
            f"items={len(self._history)})"
        )
