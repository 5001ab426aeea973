"""Error kinds raised by the dispatcher registry and its feeds."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from dispatcher.feed_item import FeedItem


class DispatcherError(Exception):
    """Base class for all dispatcher errors."""

    def __init__(self, message: str, feed_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.feed_name = feed_name


class AlreadyExistsError(DispatcherError):
    """Raised when creating a feed whose name is already registered."""

    def __init__(self, feed_name: str) -> None:
        super().__init__(f"feed already exists: {feed_name!r}", feed_name)


class NotFoundError(DispatcherError):
    """Raised when addressing a feed name that is not registered."""

    def __init__(self, feed_name: str) -> None:
        super().__init__(f"feed not found: {feed_name!r}", feed_name)


@dataclass(frozen=True)
class SubscriberFailure:
    """One callback that raised during fan-out."""

    subscriber_name: str
    error: BaseException


class DeliveryError(DispatcherError):
    """
    Raised after fan-out when one or more callbacks failed.
    Every subscriber was still notified; `failures` lists the ones that raised.
    """

    def __init__(
        self,
        feed_name: Optional[str],
        item: "FeedItem",
        failures: List[SubscriberFailure],
    ) -> None:
        names = ", ".join(f.subscriber_name for f in failures)
        super().__init__(
            f"{len(failures)} subscriber(s) failed on feed {feed_name!r}: {names}",
            feed_name,
        )
        self.item = item
        self.failures = list(failures)
