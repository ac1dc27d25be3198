"""Server-paginated table state (people, companies, opportunities lists)."""

import logging
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel

from citadel_crm.actions.results import PageResult, total_pages

logger = logging.getLogger(__name__)

R = TypeVar("R")

FetchPage = Callable[[int, int], PageResult]

# Column filter value: accepted values, or "" for a filter present but empty
FilterValue = Union[list[str], str]


def filters_from_query(params: Mapping[str, str]) -> dict[str, FilterValue]:
    """Column filters from URL query params; values are comma-separated."""
    return {key: value.split(",") if value else "" for key, value in params.items()}


def _cell(row: Any, column: str) -> Any:
    if isinstance(row, BaseModel):
        return getattr(row, column, None)
    return row.get(column)


class PagedTable(Generic[R]):
    """
    Rows of the current page plus paging, filter, sort and selection state.
    ``fetch(page_size, page)`` is called with a 1-based page number. A failed
    fetch keeps the rows and total already shown.

    Filters and sorting apply to the rows of the current page only (see
    ``rows``); the server is not asked to filter. ``selected`` holds row
    indexes into ``data`` and is cleared whenever the rows are replaced.
    """

    def __init__(
        self,
        fetch: FetchPage,
        initial_data: Optional[list[R]] = None,
        initial_total_count: int = 0,
        page_size: int = 10,
        query_params: Optional[Mapping[str, str]] = None,
    ):
        self._fetch = fetch
        self.data: list[R] = list(initial_data or [])
        self.total_count = initial_total_count
        self.page_index = 0
        self.page_size = page_size
        self.is_loading = False
        self.filters: dict[str, FilterValue] = filters_from_query(query_params or {})
        self.sorting: list[tuple[str, bool]] = []  # (column, descending)
        self.selected: set[int] = set()

    @property
    def page_count(self) -> int:
        return total_pages(self.total_count, self.page_size)

    @property
    def can_previous(self) -> bool:
        return self.page_index > 0

    @property
    def can_next(self) -> bool:
        return self.page_index + 1 < self.page_count

    @property
    def is_empty(self) -> bool:
        return not self.data

    def refresh(self) -> bool:
        """Fetch the current page. Returns True when rows were replaced."""
        self.is_loading = True
        try:
            result = self._fetch(self.page_size, self.page_index + 1)
        finally:
            self.is_loading = False
        if not result.ok:
            logger.error("Error fetching data: %s", result.error)
            return False
        self.data = list(result.data)
        self.total_count = result.total_count
        self.selected.clear()
        return True

    def set_page(self, page_index: int) -> bool:
        if page_index < 0:
            raise ValueError(f"page_index must be >= 0, got {page_index}")
        self.page_index = page_index
        return self.refresh()

    def next_page(self) -> bool:
        if not self.can_next:
            return False
        return self.set_page(self.page_index + 1)

    def previous_page(self) -> bool:
        if not self.can_previous:
            return False
        return self.set_page(self.page_index - 1)

    def set_page_size(self, page_size: int) -> bool:
        """Change rows per page; starts over from the first page."""
        if page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {page_size}")
        self.page_size = page_size
        self.page_index = 0
        return self.refresh()

    # Filtering and sorting

    def set_filter(self, column: str, values: FilterValue) -> None:
        """Set accepted values for a column; an empty value removes the filter."""
        if values:
            self.filters[column] = values
        else:
            self.filters.pop(column, None)

    def clear_filters(self) -> None:
        self.filters = {}

    def toggle_sort(self, column: str) -> None:
        """Cycle a column through ascending, descending and unsorted."""
        current = dict(self.sorting).get(column)
        if current is None:
            self.sorting = [(column, False)]
        elif current is False:
            self.sorting = [(column, True)]
        else:
            self.sorting = []

    def _matches(self, row: R) -> bool:
        for column, accepted in self.filters.items():
            if not accepted:
                continue
            value = _cell(row, column)
            if isinstance(accepted, str):
                if accepted.lower() not in str(value or "").lower():
                    return False
            elif str(value) not in accepted:
                return False
        return True

    @property
    def rows(self) -> list[R]:
        """Current page rows after column filters and sorting."""
        rows = [row for row in self.data if self._matches(row)]
        for column, descending in reversed(self.sorting):
            present = [r for r in rows if _cell(r, column) is not None]
            missing = [r for r in rows if _cell(r, column) is None]
            rows = sorted(present, key=lambda r: _cell(r, column), reverse=descending) + missing
        return rows

    # Row selection

    def toggle_row(self, row_index: int) -> None:
        if not 0 <= row_index < len(self.data):
            raise IndexError(f"row {row_index} not on this page")
        self.selected ^= {row_index}

    def select_all(self) -> None:
        self.selected = set(range(len(self.data)))

    def clear_selection(self) -> None:
        self.selected.clear()

    @property
    def selected_rows(self) -> list[R]:
        return [row for i, row in enumerate(self.data) if i in self.selected]

    def update_cell(self, row_index: int, column: str, value: Any) -> None:
        """Local edit of one cell; the row is replaced, not mutated."""
        row = self.data[row_index]
        if isinstance(row, BaseModel):
            updated = row.model_copy(update={column: value})
        else:
            updated = {**row, column: value}
        self.data = [updated if i == row_index else r for i, r in enumerate(self.data)]
