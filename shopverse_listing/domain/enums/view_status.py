from enum import Enum


class ViewStatus(str, Enum):
    """Lifecycle of a single listing view."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    LOADED = "LOADED"
    ERRORED = "ERRORED"

    @property
    def is_settled(self) -> bool:
        """Settled views have no request in flight."""
        return self in (ViewStatus.LOADED, ViewStatus.ERRORED)
