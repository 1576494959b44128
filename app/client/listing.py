"""
client/listing.py

List view state shared by the public listing pages
(publications, theses, Master/PFE, news, members).

A ListView holds the items returned by the server for the current filters,
the search term, the single-select filters and the current page.
Pagination is done locally over the already-filtered items.

- any change of the search term or of a filter resets the page to 1
- fetch() re-queries the server with the current filters
- the page is clamped to [1, page_count]

"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable

PAGE_SIZES = {
    "publications": 10,
    "theses": 10,
    "mastersis": 9,
    "actus": 6,
    "members": 8,
}


@dataclass
class ListView:
    page_size: int
    items: list = field(default_factory=list)
    search_term: str = ""
    filters: dict = field(default_factory=dict)
    page: int = 1

    @classmethod
    def for_resource(cls, resource: str) -> "ListView":
        return cls(page_size=PAGE_SIZES[resource])

    def set_search_term(self, term: str) -> None:
        self.search_term = term
        self.page = 1

    def set_filter(self, name: str, value: Any) -> None:
        """Select a value; None (or "all") clears the filter."""
        if value is None or value == "all":
            self.filters.pop(name, None)
        else:
            self.filters[name] = value
        self.page = 1

    def clear_filters(self) -> None:
        self.filters.clear()
        self.search_term = ""
        self.page = 1

    def query(self) -> dict:
        params = dict(self.filters)
        if self.search_term.strip():
            params["search_term"] = self.search_term.strip()
        return params

    def fetch(self, loader: Callable[..., Any]) -> bool:
        """loader(**query) must return an ApiResponse-like object."""
        res = loader(**self.query())
        if not res.success:
            return False
        self.items = list(res.data or [])
        self.page = min(self.page, self.page_count)
        return True

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self.items) / self.page_size))

    def go_to(self, page: int) -> None:
        self.page = min(max(1, page), self.page_count)

    def next_page(self) -> None:
        self.go_to(self.page + 1)

    def previous_page(self) -> None:
        self.go_to(self.page - 1)

    @property
    def visible(self) -> list:
        start = (self.page - 1) * self.page_size
        return self.items[start:start + self.page_size]
