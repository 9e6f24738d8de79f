import math
from dataclasses import dataclass, replace


def total_pages(total_item: int, par_page: int) -> int:
    return math.ceil(total_item / par_page)


def clamp_page_number(page_number: int, total_item: int, par_page: int) -> int:
    """Clamp page_number into [1, last page]; an empty listing collapses to page 1."""
    last_page = max(1, total_pages(total_item, par_page))
    return min(max(1, page_number), last_page)


def should_paginate(total_item: int, par_page: int) -> bool:
    """Pagination controls are only rendered when there is more than one page of items."""
    return total_item > par_page


def storefront_show_item(total_item: int, par_page: int) -> int:
    """Shop and category pages size the button window from the item total."""
    return max(1, total_item // par_page)


@dataclass(frozen=True)
class PageWindow:
    pages: tuple[int, ...]
    show_previous: bool
    show_next: bool
    total_page: int

    @property
    def start_page(self) -> int | None:
        return self.pages[0] if self.pages else None

    @property
    def end_page(self) -> int | None:
        """Exclusive upper bound of the window."""
        return self.pages[-1] + 1 if self.pages else None


def calculate_page_window(
    page_number: int,
    total_item: int,
    par_page: int,
    show_item: int,
) -> PageWindow:
    """
    Compute the page buttons to render around page_number.

    The window starts at the current page. When the pages remaining after it
    fit inside the window, the window is pulled back to end just before the
    last page. A window pulled to or before page 1 is anchored at page 1.
    The window never extends past the last page.
    """
    total_page = total_pages(total_item, par_page)

    start_page = page_number
    if total_page - page_number <= show_item:
        start_page = total_page - show_item

    if start_page <= 0:
        start_page = 1
        end_page = show_item + 1
    else:
        end_page = start_page + show_item

    end_page = min(end_page, total_page + 1)

    return PageWindow(
        pages=tuple(range(start_page, end_page)),
        show_previous=page_number > 1,
        show_next=page_number < total_page,
        total_page=total_page,
    )


@dataclass(frozen=True)
class PageState:
    """Pagination position of one listing view."""

    page_number: int = 1
    par_page: int = 1
    total_item: int = 0
    show_item: int = 1

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError("page_number must be >= 1")
        if self.par_page < 1:
            raise ValueError("par_page must be >= 1")
        if self.total_item < 0:
            raise ValueError("total_item must be >= 0")
        if self.show_item < 1:
            raise ValueError("show_item must be >= 1")

    @property
    def total_page(self) -> int:
        return total_pages(self.total_item, self.par_page)

    @property
    def paginated(self) -> bool:
        return should_paginate(self.total_item, self.par_page)

    def clamped(self) -> "PageState":
        return replace(
            self,
            page_number=clamp_page_number(self.page_number, self.total_item, self.par_page),
        )

    def window(self) -> PageWindow:
        return calculate_page_window(
            self.page_number, self.total_item, self.par_page, self.show_item
        )
