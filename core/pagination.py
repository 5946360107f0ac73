# core/pagination.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

DEFAULT_PAGE_SIZE = 20
STATUS_FILTERS = ("all", "active", "inactive")


@dataclass
class Page:
    """One page of a list endpoint, whether the backend paginated it or not."""
    results: List[Dict[str, Any]] = field(default_factory=list)
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None

    @classmethod
    def from_response(cls, data: Any, list_key: Optional[str] = None) -> "Page":
        """
        Accepts a DRF page (`results`/`count`/`next`/`previous`), a bare
        list, a single object, or a dict holding the list under `list_key`.
        """
        if isinstance(data, dict) and "results" in data:
            results = list(data.get("results") or [])
            return cls(
                results=results,
                count=int(data.get("count") or len(results)),
                next=data.get("next") or None,
                previous=data.get("previous") or None,
            )
        if isinstance(data, dict) and list_key and isinstance(data.get(list_key), list):
            results = list(data[list_key])
            return cls(results=results, count=len(results))
        if isinstance(data, list):
            return cls(results=list(data), count=len(data))
        if isinstance(data, dict) and data:
            return cls(results=[data], count=1)
        return cls()


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Never less than one, so an empty list still shows 'Page 1 of 1'."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(1, math.ceil(max(count, 0) / page_size))


def clamp_page(page: int, count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    return min(max(int(page), 1), total_pages(count, page_size))


def page_range(page: int, count: int, page_size: int = DEFAULT_PAGE_SIZE) -> tuple[int, int]:
    """1-based (first, last) item numbers shown on `page`; (0, 0) when empty."""
    if count <= 0:
        return 0, 0
    page = clamp_page(page, count, page_size)
    first = (page - 1) * page_size + 1
    last = min(page * page_size, count)
    return first, last


def filter_records(
    records: Iterable[Dict[str, Any]],
    search: str = "",
    status: str = "all",
    search_fields: Sequence[str] = (),
    active_field: str = "is_active",
) -> List[Dict[str, Any]]:
    """Case-insensitive substring search over `search_fields` plus an active/inactive filter."""
    q = (search or "").strip().lower()
    out = []
    for rec in records:
        if q and not any(q in str(rec.get(f) or "").lower() for f in search_fields):
            continue
        if status == "active" and not rec.get(active_field):
            continue
        if status == "inactive" and rec.get(active_field):
            continue
        out.append(rec)
    return out


@dataclass
class ListState:
    """Page number and filters of one list screen, kept in the session between reruns."""
    page: int = 1
    search: str = ""
    status: str = "all"
    page_size: int = DEFAULT_PAGE_SIZE

    def set_filters(self, search: str, status: str) -> bool:
        """Apply new filters; any change sends the list back to page 1. Returns True on change."""
        if status not in STATUS_FILTERS:
            status = "all"
        if (search, status) == (self.search, self.status):
            return False
        self.search, self.status = search, status
        self.page = 1
        return True

    def go_to(self, page: int, count: int) -> int:
        self.page = clamp_page(page, count, self.page_size)
        return self.page

    def next_page(self, count: int) -> int:
        return self.go_to(self.page + 1, count)

    def previous_page(self, count: int) -> int:
        return self.go_to(self.page - 1, count)


def list_state(store, key: str, page_size: int = DEFAULT_PAGE_SIZE) -> ListState:
    """Get or create the ListState stored under `key`."""
    state = store.get(key)
    if not isinstance(state, ListState):
        state = ListState(page_size=page_size)
        store[key] = state
    return state
