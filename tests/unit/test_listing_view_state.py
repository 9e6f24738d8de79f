"""Unit tests for the listing view state; the listing source is mocked."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from shopverse_listing.application.interfaces.listing_source import ListingSource
from shopverse_listing.application.listing_view_state import ListingViewState
from shopverse_listing.application.query_builder import RequestParams
from shopverse_listing.domain.entities.filter_descriptor import FilterDescriptor, PriceRange
from shopverse_listing.domain.entities.listing_endpoint import ListingEndpoint, get_endpoint
from shopverse_listing.domain.entities.listing_result import ListingResult
from shopverse_listing.domain.enums.view_status import ViewStatus
from shopverse_listing.domain.errors import ListingFetchError, ValidationError
from shopverse_listing.domain.events.listing_events import (
    ListingFetchFailedEvent,
    ListingLoadedEvent,
    ListingRequestedEvent,
    StaleResponseDiscardedEvent,
)


class ControlledSource(ListingSource):
    """Listing source whose responses are resolved by the test, in any order."""

    def __init__(self) -> None:
        self.requests: list[RequestParams] = []
        self.pending: list[asyncio.Future] = []  # type: ignore[type-arg]

    async def fetch(self, endpoint: ListingEndpoint, params: RequestParams) -> ListingResult:
        future: asyncio.Future = asyncio.get_running_loop().create_future()  # type: ignore[type-arg]
        self.requests.append(params)
        self.pending.append(future)
        return await future

    async def get_price_range(self) -> PriceRange:
        return PriceRange(low=0, high=100)


def _result(tag: str, count: int = 2, total: int = 12, par_page: int = 5) -> ListingResult:
    return ListingResult(
        items=tuple({"_id": f"{tag}-{i}", "name": tag} for i in range(count)),
        total_item=total,
        par_page=par_page,
    )


def _make_source(result: ListingResult | None = None) -> MagicMock:
    source = MagicMock()
    source.fetch = AsyncMock(return_value=result or _result("a"))
    return source


def _make_view(source: object, **kwargs: object) -> ListingViewState:
    kwargs.setdefault("par_page", 5)
    kwargs.setdefault("show_item", 3)
    return ListingViewState(source, get_endpoint("query_products"), **kwargs)  # type: ignore[arg-type]


class TestMount:
    @pytest.mark.asyncio
    async def test_starts_idle(self) -> None:
        view = _make_view(_make_source())
        snapshot = view.snapshot()
        assert snapshot.status == ViewStatus.IDLE
        assert snapshot.items == ()
        assert snapshot.window.pages == ()

    @pytest.mark.asyncio
    async def test_mount_loads_first_page(self) -> None:
        source = _make_source(_result("a", count=5, total=12))
        view = _make_view(source)

        snapshot = await view.mount()

        assert snapshot.status == ViewStatus.LOADED
        assert len(snapshot.items) == 5
        assert snapshot.total_item == 12
        assert snapshot.window.pages == (1, 2, 3)
        assert snapshot.paginated is True
        params = source.fetch.await_args.args[1]
        assert params.page == 1
        assert params.par_page == 5

    @pytest.mark.asyncio
    async def test_invalid_initial_filters_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _make_view(_make_source(), filters=FilterDescriptor(rating=9))

    @pytest.mark.asyncio
    async def test_storefront_window_width_follows_total(self) -> None:
        source = _make_source(_result("a", total=12, par_page=3))
        view = _make_view(source, par_page=3, show_item=None)
        snapshot = await view.mount()
        assert snapshot.page.show_item == 4


class TestFilterChanges:
    @pytest.mark.asyncio
    async def test_filter_change_returns_to_first_page(self) -> None:
        source = _make_source()
        view = _make_view(source)
        await view.set_page(2)

        snapshot = await view.set_filters(category="Cameras")

        assert snapshot.filters.page_number == 1
        assert snapshot.filters.category == "Cameras"
        assert source.fetch.await_count == 2
        assert source.fetch.await_args.args[1].category == "Cameras"

    @pytest.mark.asyncio
    async def test_set_page_keeps_filters(self) -> None:
        source = _make_source()
        view = _make_view(source)
        await view.set_filters(category="Cameras", sort_price="low-to-high")

        snapshot = await view.set_page(2)

        assert snapshot.filters.category == "Cameras"
        params = source.fetch.await_args.args[1]
        assert params.page == 2
        assert params.sort_price == "low-to-high"

    @pytest.mark.asyncio
    async def test_invalid_filter_issues_no_fetch(self) -> None:
        source = _make_source()
        view = _make_view(source)
        await view.mount()

        with pytest.raises(ValidationError):
            await view.set_filters(price_low="abc")

        assert source.fetch.await_count == 1
        assert view.status == ViewStatus.LOADED
        assert view.filters.price_low == ""

    @pytest.mark.asyncio
    async def test_unknown_filter_is_rejected(self) -> None:
        source = _make_source()
        view = _make_view(source)

        with pytest.raises(ValidationError) as exc_info:
            await view.set_filters(colour="red")

        assert exc_info.value.field == "colour"
        source.fetch.assert_not_awaited()
        assert view.status == ViewStatus.IDLE

    @pytest.mark.asyncio
    async def test_reset_restores_defaults(self) -> None:
        source = _make_source()
        view = _make_view(source)
        await view.set_filters(category="Cameras", rating=4, search_value="sony")

        snapshot = await view.reset(PriceRange(low=10, high=500))

        assert snapshot.filters == FilterDescriptor(price_low=10, price_high=500)
        params = source.fetch.await_args.args[1]
        assert (params.low, params.high, params.category, params.rating) == (10, 500, "", "")

    @pytest.mark.asyncio
    async def test_page_reclamped_when_total_shrinks(self) -> None:
        source = _make_source(_result("a", count=0, total=12, par_page=5))
        view = _make_view(source)

        snapshot = await view.set_page(7)

        assert snapshot.filters.page_number == 3
        assert snapshot.window.show_next is False


class TestFetchFailure:
    @pytest.mark.asyncio
    async def test_failure_keeps_previous_items(self) -> None:
        source = _make_source(_result("a"))
        view = _make_view(source)
        loaded = await view.mount()

        source.fetch = AsyncMock(
            side_effect=ListingFetchError(
                "query_products returned 500",
                payload={"error": "Internal Server Error"},
                status_code=500,
            )
        )
        snapshot = await view.set_page(2)

        assert snapshot.status == ViewStatus.ERRORED
        assert snapshot.error_message == "Internal Server Error"
        assert snapshot.items == loaded.items

    @pytest.mark.asyncio
    async def test_network_failure_message(self) -> None:
        source = _make_source()
        source.fetch = AsyncMock(side_effect=ListingFetchError("Network error"))
        view = _make_view(source)

        snapshot = await view.mount()

        assert snapshot.status == ViewStatus.ERRORED
        assert snapshot.error_message == "Network error"

    @pytest.mark.asyncio
    async def test_retry_after_error_recovers(self) -> None:
        source = _make_source()
        source.fetch = AsyncMock(side_effect=[ListingFetchError("Network error"), _result("b")])
        view = _make_view(source)
        await view.mount()

        snapshot = await view.retry()

        assert snapshot.status == ViewStatus.LOADED
        assert snapshot.error_message is None
        assert snapshot.items[0]["name"] == "b"

    @pytest.mark.asyncio
    async def test_unexpected_source_error_does_not_leave_view_loading(self) -> None:
        source = _make_source()
        source.fetch = AsyncMock(side_effect=AttributeError("'str' object has no attribute 'get'"))
        view = _make_view(source)

        with pytest.raises(AttributeError):
            await view.mount()

        assert view.status == ViewStatus.ERRORED
        assert view.snapshot().error_message.startswith("AttributeError")

        source.fetch = AsyncMock(return_value=_result("b"))
        snapshot = await view.retry()
        assert snapshot.status == ViewStatus.LOADED


class TestStaleResponses:
    @pytest.mark.asyncio
    async def test_older_response_resolving_last_is_discarded(self) -> None:
        source = ControlledSource()
        view = _make_view(source)

        task_a = asyncio.create_task(view.set_filters(category="Cameras"))
        await asyncio.sleep(0)
        task_b = asyncio.create_task(view.set_filters(category="Shoes"))
        await asyncio.sleep(0)
        assert len(source.pending) == 2

        source.pending[1].set_result(_result("b", total=7))
        await task_b
        source.pending[0].set_result(_result("a", total=40))
        await task_a

        snapshot = view.snapshot()
        assert snapshot.status == ViewStatus.LOADED
        assert snapshot.filters.category == "Shoes"
        assert snapshot.total_item == 7
        assert {item["name"] for item in snapshot.items} == {"b"}

        discarded = [e for e in view.collect_events() if isinstance(e, StaleResponseDiscardedEvent)]
        assert len(discarded) == 1
        assert discarded[0].sequence == 1
        assert discarded[0].latest_sequence == 2

    @pytest.mark.asyncio
    async def test_older_response_resolving_first_is_discarded(self) -> None:
        source = ControlledSource()
        view = _make_view(source)

        task_a = asyncio.create_task(view.set_page(2))
        await asyncio.sleep(0)
        task_b = asyncio.create_task(view.set_page(3))
        await asyncio.sleep(0)

        source.pending[0].set_result(_result("a"))
        await task_a
        assert view.status == ViewStatus.LOADING
        assert view.snapshot().items == ()

        source.pending[1].set_result(_result("b"))
        await task_b
        assert view.snapshot().items[0]["name"] == "b"
        assert view.filters.page_number == 3

    @pytest.mark.asyncio
    async def test_stale_failure_does_not_error_the_view(self) -> None:
        source = ControlledSource()
        view = _make_view(source)

        task_a = asyncio.create_task(view.set_page(2))
        await asyncio.sleep(0)
        task_b = asyncio.create_task(view.set_page(3))
        await asyncio.sleep(0)

        source.pending[1].set_result(_result("b"))
        await task_b
        source.pending[0].set_exception(ListingFetchError("Network error"))
        await task_a

        assert view.status == ViewStatus.LOADED
        assert view.snapshot().error_message is None

    @pytest.mark.asyncio
    async def test_response_after_unmount_is_discarded(self) -> None:
        source = ControlledSource()
        view = _make_view(source)

        task = asyncio.create_task(view.mount())
        await asyncio.sleep(0)
        unmounted = view.unmount()
        source.pending[0].set_result(_result("a"))
        await task

        assert unmounted.status == ViewStatus.IDLE
        assert view.status == ViewStatus.IDLE
        assert view.snapshot().items == ()


class TestEvents:
    @pytest.mark.asyncio
    async def test_request_then_loaded(self) -> None:
        view = _make_view(_make_source())
        await view.mount()

        events = view.collect_events()

        assert [type(e) for e in events] == [ListingRequestedEvent, ListingLoadedEvent]
        assert events[0].query["pageNumber"] == 1
        assert events[1].total_item == 12
        assert view.collect_events() == []

    @pytest.mark.asyncio
    async def test_failure_event_carries_status(self) -> None:
        source = _make_source()
        source.fetch = AsyncMock(
            side_effect=ListingFetchError("boom", payload={"error": "nope"}, status_code=404)
        )
        view = _make_view(source)
        await view.mount()

        failed = [e for e in view.collect_events() if isinstance(e, ListingFetchFailedEvent)]
        assert failed[0].status_code == 404
        assert failed[0].message == "nope"
