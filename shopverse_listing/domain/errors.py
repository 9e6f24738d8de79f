from typing import Any


class ListingError(Exception):
    """Base class for listing-core failures."""


class ValidationError(ListingError):
    """Raised when filter input cannot be turned into request parameters."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"Invalid {field}: {message}")


class ListingFetchError(ListingError):
    """
    Raised when a listing request fails in transport or on the server.

    `payload` holds whatever the server sent back (usually `{"error": "..."}`);
    it is None when the server was never reached.
    """

    def __init__(
        self,
        message: str,
        *,
        payload: Any = None,
        status_code: int | None = None,
    ) -> None:
        self.payload = payload
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_network_failure(self) -> bool:
        return self.status_code is None and self.payload is None

    @property
    def server_message(self) -> str | None:
        if isinstance(self.payload, dict):
            message = self.payload.get("error") or self.payload.get("message")
            return str(message) if message else None
        if isinstance(self.payload, str) and self.payload:
            return self.payload
        return None


class StaleResponseDiscarded(ListingError):
    """Signals that a resolved fetch was superseded by a newer request."""

    def __init__(self, sequence: int, latest: int) -> None:
        self.sequence = sequence
        self.latest = latest
        super().__init__(f"Response #{sequence} superseded by request #{latest}.")


class UnknownEndpointError(ListingError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown listing endpoint: {name}")

    def __str__(self) -> str:
        return self.args[0]
