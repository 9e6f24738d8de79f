from shopverse_listing.domain.enums.view_status import ViewStatus


# Mapping of valid transitions: from_status -> set of allowed to_statuses
VALID_TRANSITIONS: dict[ViewStatus, frozenset[ViewStatus]] = {
    ViewStatus.IDLE: frozenset({ViewStatus.LOADING}),
    # A new request may supersede one still in flight
    ViewStatus.LOADING: frozenset(
        {ViewStatus.LOADING, ViewStatus.LOADED, ViewStatus.ERRORED, ViewStatus.IDLE}
    ),
    ViewStatus.LOADED: frozenset({ViewStatus.LOADING, ViewStatus.IDLE}),
    ViewStatus.ERRORED: frozenset({ViewStatus.LOADING, ViewStatus.IDLE}),
}


class InvalidStateTransitionError(Exception):
    """Raised when an invalid view status transition is attempted."""

    def __init__(self, from_status: ViewStatus, to_status: ViewStatus) -> None:
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid transition from {from_status.value} to {to_status.value}. "
            f"Allowed transitions: {sorted(s.value for s in VALID_TRANSITIONS.get(from_status, frozenset()))}"
        )


class ViewStateMachine:
    """
    Validates status transitions of a listing view.

    Stateless: call validate_transition() with explicit statuses.
    """

    def can_transition(self, from_status: ViewStatus, to_status: ViewStatus) -> bool:
        return to_status in VALID_TRANSITIONS.get(from_status, frozenset())

    def validate_transition(self, from_status: ViewStatus, to_status: ViewStatus) -> None:
        """Raise InvalidStateTransitionError if the transition is not permitted."""
        if not self.can_transition(from_status, to_status):
            raise InvalidStateTransitionError(from_status, to_status)

    def get_allowed_transitions(self, from_status: ViewStatus) -> frozenset[ViewStatus]:
        return VALID_TRANSITIONS.get(from_status, frozenset())
