"""FeedItem record for values published on a feed."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FeedItem(Generic[T]):
    """One published value plus the time it was published. Immutable once created."""

    value: T
    feed_name: Optional[str] = None
    item_id: Optional[str] = None
    published_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize item for logging."""
        return {
            "item_id": self.item_id,
            "feed_name": self.feed_name,
            "value": self.value,
            "published_at": self.published_at.isoformat(),
        }
