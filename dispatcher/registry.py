"""In-memory registry of feeds: feed lifecycle, subscriptions and publishing by name."""

import threading
from typing import Any, Dict, List, Optional

from dispatcher.config import DispatcherSettings, load_settings
from dispatcher.errors import AlreadyExistsError, NotFoundError
from dispatcher.feed import Feed
from dispatcher.feed_item import FeedItem
from dispatcher.observability import Metrics, get_logger
from dispatcher.subscription import OnNewItem


class Registry:
    """
    Owns the feed namespace and forwards subscribe/unsubscribe/publish calls
    to the addressed feed.

    Addressing a missing feed raises NotFoundError and creating a duplicate
    raises AlreadyExistsError, unless the registry is silent, in which case
    the call is skipped. Mutators other than publish return the registry so
    calls can be chained.
    """

    def __init__(
        self,
        silent: Optional[bool] = None,
        settings: Optional[DispatcherSettings] = None,
    ) -> None:
        self._settings = settings or DispatcherSettings()
        self._silent = self._settings.silent if silent is None else bool(silent)
        self._feeds: Dict[str, Feed] = {}
        self._lock = threading.RLock()
        self._metrics = Metrics()
        self._logger = get_logger("dispatcher.registry", self._settings.log_level)

    @property
    def silent(self) -> bool:
        return self._silent

    @property
    def settings(self) -> DispatcherSettings:
        return self._settings

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def set_silent(self, should_be_silent: Optional[bool]) -> "Registry":
        """Toggle silent mode (None means False). Returns self."""
        self._silent = bool(should_be_silent)
        return self

    def _new_feed(self, name: str) -> Feed:
        return Feed(
            name,
            history_size=self._settings.history_size,
            raise_delivery_errors=self._settings.raise_delivery_errors,
            log_level=self._settings.log_level,
            metrics=self._metrics,
        )

    def create_feed(self, name: str, override: bool = False) -> "Registry":
        """
        Register a new empty feed under `name`.
        With override=True any existing feed is replaced, dropping its
        subscribers and history. Otherwise an existing name raises
        AlreadyExistsError (or is skipped when silent). Returns self.
        """
        with self._lock:
            if override:
                replaced = self._feeds.get(name)
                self._feeds[name] = self._new_feed(name)
                if replaced is not None:
                    self._metrics.increment("feeds_replaced")
                    self._logger.warning(
                        "feed_replaced",
                        extra={
                            "feed": name,
                            "dropped_subscribers": replaced.subscriber_count,
                            "dropped_items": len(replaced.items),
                        },
                    )
                else:
                    self._feed_created(name)
                return self
            if self._check_not_contains(name):
                self._feeds[name] = self._new_feed(name)
                self._feed_created(name)
        return self

    def _feed_created(self, name: str) -> None:
        self._metrics.increment("feeds_created")
        self._metrics.set_gauge("feeds", len(self._feeds))
        self._logger.info("feed_created", extra={"feed": name})

    def subscribe_to(
        self,
        name: str,
        subscriber_name: str,
        callback: OnNewItem[Any],
    ) -> "Registry":
        """Register `callback` on feed `name` under `subscriber_name`; first one wins. Returns self."""
        feed = self._resolve(name)
        if feed is not None:
            feed.subscribe(subscriber_name, callback)
        return self

    def unsubscribe_to(self, name: str, subscriber_name: str) -> "Registry":
        """Remove `subscriber_name` from feed `name` if registered. Returns self."""
        feed = self._resolve(name)
        if feed is not None:
            feed.unsubscribe(subscriber_name)
        return self

    def publish(self, name: str, value: Any) -> Optional[FeedItem]:
        """
        Publish `value` on feed `name` and notify its subscribers.
        Returns the created item, or None when skipped in silent mode.
        """
        feed = self._resolve(name)
        if feed is None:
            return None
        return feed.publish(value)

    def _resolve(self, name: str) -> Optional[Feed]:
        with self._lock:
            if not self._check_contains(name):
                return None
            return self._feeds[name]

    def _check_contains(self, name: str) -> bool:
        """True if `name` is registered; False (silent) or NotFoundError otherwise."""
        if name in self._feeds:
            return True
        if self._silent:
            self._metrics.increment("silent_skips")
            self._logger.debug("feed_not_found_skipped", extra={"feed": name})
            return False
        raise NotFoundError(name)

    def _check_not_contains(self, name: str) -> bool:
        """True if `name` is free; False (silent) or AlreadyExistsError otherwise."""
        if name not in self._feeds:
            return True
        if self._silent:
            self._metrics.increment("silent_skips")
            self._logger.debug("feed_exists_skipped", extra={"feed": name})
            return False
        raise AlreadyExistsError(name)

    def get_feed(self, name: str) -> Optional[Feed]:
        """Return feed by name or None."""
        with self._lock:
            return self._feeds.get(name)

    def has_feed(self, name: str) -> bool:
        with self._lock:
            return name in self._feeds

    def feed_names(self) -> List[str]:
        """Registered feed names in creation order."""
        with self._lock:
            return list(self._feeds)

    def feed_count(self) -> int:
        with self._lock:
            return len(self._feeds)

    def feed_stats(self) -> Dict[str, Dict[str, int]]:
        """Return { feed_name: { published, retained, subscribers, delivery_failures } }."""
        with self._lock:
            feeds = dict(self._feeds)
        return {
            name: {
                "published": feed.items_published,
                "retained": len(feed.items),
                "subscribers": feed.subscriber_count,
                "delivery_failures": feed.delivery_failures,
            }
            for name, feed in feeds.items()
        }

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._feeds

    def __len__(self) -> int:
        return self.feed_count()

    def __repr__(self) -> str:
        return f"Registry(feeds={self.feed_count()}, silent={self._silent})"


# Registry is also exposed under its package name.
Dispatcher = Registry

_default_registry: Optional[Registry] = None
_default_lock = threading.Lock()


def get_default_registry() -> Registry:
    """Return the process-wide registry, creating it from the environment on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = Registry(settings=load_settings())
    return _default_registry
