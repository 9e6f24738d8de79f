from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ListingEvent:
    """Base class for all listing view events."""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)
    endpoint: str = ""
    sequence: int = 0


@dataclass(frozen=True)
class ListingRequestedEvent(ListingEvent):
    """Recorded when a view issues a fetch for a filter snapshot."""

    query: dict = field(default_factory=dict)  # type: ignore[type-arg]


@dataclass(frozen=True)
class ListingLoadedEvent(ListingEvent):
    item_count: int = 0
    total_item: int = 0
    page_number: int = 1


@dataclass(frozen=True)
class ListingFetchFailedEvent(ListingEvent):
    message: str = ""
    status_code: int | None = None


@dataclass(frozen=True)
class StaleResponseDiscardedEvent(ListingEvent):
    """A resolved fetch was dropped because a newer request superseded it."""

    latest_sequence: int = 0
