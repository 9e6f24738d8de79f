"""
Per-listing view state: filters, pagination position and the current page of items.

One instance backs one rendered listing (shop page, admin orders table, ...).
Instances are never shared between views, so no locking is involved; the only
concurrency hazard is overlapping fetches on the same instance. Every fetch is
tagged with a sequence number and only the response to the most recently
issued request is applied. Anything older is dropped.
"""
from dataclasses import dataclass

import structlog

from shopverse_listing.application.interfaces.listing_source import ListingSource
from shopverse_listing.application.query_builder import QueryBuilder, RequestParams
from shopverse_listing.config import settings
from shopverse_listing.domain.entities.filter_descriptor import FilterDescriptor, PriceRange
from shopverse_listing.domain.entities.listing_endpoint import ListingEndpoint
from shopverse_listing.domain.entities.listing_result import Item, ListingResult
from shopverse_listing.domain.enums.view_status import ViewStatus
from shopverse_listing.domain.errors import ListingFetchError, StaleResponseDiscarded
from shopverse_listing.domain.events.listing_events import (
    ListingEvent,
    ListingFetchFailedEvent,
    ListingLoadedEvent,
    ListingRequestedEvent,
    StaleResponseDiscardedEvent,
)
from shopverse_listing.domain.pagination.page_window import (
    PageState,
    PageWindow,
    clamp_page_number,
    storefront_show_item,
)
from shopverse_listing.domain.state_machine.view_state_machine import ViewStateMachine

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ListingSnapshot:
    status: ViewStatus
    filters: FilterDescriptor
    page: PageState
    window: PageWindow
    items: tuple[Item, ...]
    total_item: int
    par_page: int
    error_message: str | None
    sequence: int

    @property
    def paginated(self) -> bool:
        return self.page.paginated


class ListingViewState:
    """
    Owns the FilterDescriptor and PageState of one listing.

    Each mutating coroutine validates the new filters, issues a fetch and
    returns the snapshot it ended with. Invalid input raises ValidationError
    before anything changes. Fetch failures never raise: the view moves to
    ERRORED and keeps the last good items.

    show_item=None sizes the button window from the total, the way the
    storefront does; admin tables pass a fixed width.
    """

    def __init__(
        self,
        source: ListingSource,
        endpoint: ListingEndpoint,
        *,
        par_page: int = settings.default_par_page,
        show_item: int | None = None,
        filters: FilterDescriptor | None = None,
        query_builder: QueryBuilder | None = None,
    ) -> None:
        self._source = source
        self._endpoint = endpoint
        self._par_page = par_page
        self._show_item = show_item
        self._query_builder = query_builder or QueryBuilder()
        self._state_machine = ViewStateMachine()

        initial = filters or FilterDescriptor()
        params = self._query_builder.build(initial, par_page)
        self._initial_filters = initial.with_changes(page_number=params.page)

        self._sequence = 0
        self._events: list[ListingEvent] = []
        self._clear()

    def _clear(self) -> None:
        self._status = ViewStatus.IDLE
        self._filters = self._initial_filters
        self._items: tuple[Item, ...] = ()
        self._total_item = 0
        self._result_par_page = self._par_page
        self._error_message: str | None = None

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def status(self) -> ViewStatus:
        return self._status

    @property
    def filters(self) -> FilterDescriptor:
        return self._filters

    def snapshot(self) -> ListingSnapshot:
        show_item = self._show_item or storefront_show_item(
            self._total_item, self._result_par_page
        )
        page = PageState(
            page_number=self._filters.page_number,
            par_page=self._result_par_page,
            total_item=self._total_item,
            show_item=show_item,
        )
        return ListingSnapshot(
            status=self._status,
            filters=self._filters,
            page=page,
            window=page.window(),
            items=self._items,
            total_item=self._total_item,
            par_page=self._result_par_page,
            error_message=self._error_message,
            sequence=self._sequence,
        )

    # -------------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------------

    async def mount(self) -> ListingSnapshot:
        return await self._refresh(self._filters)

    async def set_filters(self, **changes: object) -> ListingSnapshot:
        """Apply filter edits; any edit other than an explicit page change returns to page 1."""
        changes.setdefault("page_number", 1)
        return await self._refresh(self._filters.with_changes(**changes))

    async def set_page(self, page_number: int) -> ListingSnapshot:
        return await self._refresh(self._filters.with_changes(page_number=page_number))

    async def reset(self, price_range: PriceRange) -> ListingSnapshot:
        return await self._refresh(self._query_builder.reset(price_range))

    async def retry(self) -> ListingSnapshot:
        return await self._refresh(self._filters)

    def unmount(self) -> ListingSnapshot:
        """Back to IDLE with fresh defaults; responses still in flight will be discarded."""
        if self._status != ViewStatus.IDLE:
            self._state_machine.validate_transition(self._status, ViewStatus.IDLE)
        self._sequence += 1
        self._clear()
        logger.info("listing_unmounted", endpoint=self._endpoint.name)
        return self.snapshot()

    # -------------------------------------------------------------------------
    # Fetch cycle
    # -------------------------------------------------------------------------

    async def _refresh(self, filters: FilterDescriptor) -> ListingSnapshot:
        # May raise ValidationError; nothing has changed yet at this point
        params = self._query_builder.build(filters, self._par_page)

        self._filters = filters.with_changes(page_number=params.page)
        self._transition(ViewStatus.LOADING)
        self._sequence += 1
        sequence = self._sequence
        self._record_request(sequence, params)

        outcome: ListingResult | ListingFetchError
        try:
            outcome = await self._source.fetch(self._endpoint, params)
        except ListingFetchError as exc:
            outcome = exc
        except Exception as exc:
            # The view must not stay LOADING; the error still propagates
            if sequence == self._sequence:
                self._fail(ListingFetchError(f"{type(exc).__name__}: {exc}"), sequence)
            raise

        try:
            self._ensure_current(sequence)
        except StaleResponseDiscarded as stale:
            self._record_discard(stale)
            return self.snapshot()

        if isinstance(outcome, ListingFetchError):
            self._fail(outcome, sequence)
        else:
            self._apply(outcome, sequence)
        return self.snapshot()

    def _ensure_current(self, sequence: int) -> None:
        if sequence != self._sequence:
            raise StaleResponseDiscarded(sequence, self._sequence)

    def _apply(self, result: ListingResult, sequence: int) -> None:
        self._items = result.items
        self._total_item = result.total_item
        self._result_par_page = result.par_page
        self._error_message = None

        page_number = clamp_page_number(
            self._filters.page_number, result.total_item, result.par_page
        )
        if page_number != self._filters.page_number:
            logger.info(
                "listing_page_clamped",
                endpoint=self._endpoint.name,
                requested=self._filters.page_number,
                clamped=page_number,
            )
            self._filters = self._filters.with_changes(page_number=page_number)

        self._transition(ViewStatus.LOADED)
        self._events.append(
            ListingLoadedEvent(
                endpoint=self._endpoint.name,
                sequence=sequence,
                item_count=len(result.items),
                total_item=result.total_item,
                page_number=page_number,
            )
        )
        logger.info(
            "listing_loaded",
            endpoint=self._endpoint.name,
            sequence=sequence,
            items=len(result.items),
            total_item=result.total_item,
        )

    def _fail(self, error: ListingFetchError, sequence: int) -> None:
        self._error_message = error.server_message or str(error)
        self._transition(ViewStatus.ERRORED)
        self._events.append(
            ListingFetchFailedEvent(
                endpoint=self._endpoint.name,
                sequence=sequence,
                message=self._error_message,
                status_code=error.status_code,
            )
        )
        logger.warning(
            "listing_fetch_failed",
            endpoint=self._endpoint.name,
            sequence=sequence,
            error=self._error_message,
            status_code=error.status_code,
        )

    def _record_request(self, sequence: int, params: RequestParams) -> None:
        query = params.to_query(self._endpoint)
        self._events.append(
            ListingRequestedEvent(endpoint=self._endpoint.name, sequence=sequence, query=query)
        )
        logger.debug(
            "listing_requested", endpoint=self._endpoint.name, sequence=sequence, query=query
        )

    def _record_discard(self, stale: StaleResponseDiscarded) -> None:
        self._events.append(
            StaleResponseDiscardedEvent(
                endpoint=self._endpoint.name,
                sequence=stale.sequence,
                latest_sequence=stale.latest,
            )
        )
        logger.debug(
            "stale_response_discarded",
            endpoint=self._endpoint.name,
            sequence=stale.sequence,
            latest=stale.latest,
        )

    def _transition(self, to_status: ViewStatus) -> None:
        self._state_machine.validate_transition(self._status, to_status)
        self._status = to_status

    # -------------------------------------------------------------------------
    # Event collection
    # -------------------------------------------------------------------------

    def collect_events(self) -> list[ListingEvent]:
        """Return pending events and clear the internal buffer."""
        events = list(self._events)
        self._events.clear()
        return events
