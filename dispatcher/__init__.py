"""In-process feed dispatcher: named feeds, named subscriber callbacks, synchronous fan-out."""

from dispatcher.config import DispatcherSettings, load_settings
from dispatcher.errors import (
    AlreadyExistsError,
    DeliveryError,
    DispatcherError,
    NotFoundError,
    SubscriberFailure,
)
from dispatcher.feed import Feed
from dispatcher.feed_item import FeedItem
from dispatcher.registry import Dispatcher, Registry, get_default_registry
from dispatcher.subscription import Subscription

__all__ = [
    "AlreadyExistsError",
    "DeliveryError",
    "Dispatcher",
    "DispatcherError",
    "DispatcherSettings",
    "Feed",
    "FeedItem",
    "NotFoundError",
    "Registry",
    "SubscriberFailure",
    "Subscription",
    "get_default_registry",
    "load_settings",
]
