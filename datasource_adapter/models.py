"""Request / response data structures for a single page fetch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Schema-less datasource object; field names and values are passed through.
Record = dict[str, Any]


@dataclass(frozen=True)
class PageRequest:
    """One page request. Built by the caller, consumed by one fetch.

    ``auth_token`` is sent as the ``Authorization`` header value verbatim
    (e.g. ``"Bearer abc"``).
    """

    base_url: str
    entity_name: str
    page_size: int
    cursor: str = ""
    auth_token: str = ""

    def __repr__(self) -> str:
        return (
            f"PageRequest(base_url={self.base_url!r}, entity_name={self.entity_name!r}, "
            f"page_size={self.page_size}, cursor={self.cursor!r}, auth_token=***)"
        )


@dataclass
class PageResponse:
    """Result of one page fetch.

    ``next_cursor`` is empty once the datasource reports no more data.
    ``records`` is empty whenever ``status_code`` is not 200.
    """

    status_code: int
    records: list[Record] = field(default_factory=list)
    next_cursor: str = ""
    retry_hint: str | None = None  # Retry-After header, verbatim

    @property
    def has_more(self) -> bool:
        return self.next_cursor != ""
