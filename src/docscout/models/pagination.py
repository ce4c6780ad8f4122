"""Length-aware paginator returned by ``SearchRequest.paginate()``."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field


class Paginator(BaseModel):
    """One page of results plus the totals needed to render page links."""

    items: list[Any] = Field(default_factory=list, description="Records (or raw hits) on this page")
    total: int = Field(default=0, ge=0, description="Total matches across all pages")
    per_page: int = Field(ge=1, description="Page size")
    current_page: int = Field(ge=1, description="1-based page number")
    page_name: str = Field(default="page", description="Query parameter carrying the page number")
    query: str | None = Field(default=None, description="Search text appended to page links")
    raw: dict[str, Any] | None = Field(default=None, description="Raw backend response for this page")

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    @property
    def on_first_page(self) -> bool:
        return self.current_page <= 1

    @property
    def first_item(self) -> int | None:
        """1-based position of the first item on this page across the whole result."""
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    def link_params(self, page: int) -> dict[str, Any]:
        """Query parameters for a link to ``page``."""
        params: dict[str, Any] = {self.page_name: page}
        if self.query is not None:
            params["query"] = self.query
        return params

    def __len__(self) -> int:
        return len(self.items)
