"""Search result models: ranked hit identifiers parsed from a backend response."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """One backend match, identified by document id and rank position."""

    id: str = Field(description="Document identifier (``_id``)")
    rank: int = Field(ge=0, description="Zero-based position in the backend response")
    score: float | None = Field(default=None, description="Relevance score (``_score``), if any")


class SearchResult(BaseModel):
    """Ranked hits, total match count and the untouched backend payload."""

    hits: list[SearchHit] = Field(default_factory=list, description="Hits in backend rank order")
    total: int = Field(default=0, description="Authoritative total match count")
    raw: dict[str, Any] = Field(default_factory=dict, description="Raw backend response")

    @staticmethod
    def total_from_response(response: dict[str, Any]) -> int:
        """Read ``hits.total``, which is ``{"value": n}`` on current backends and an int on old ones."""
        total = response.get("hits", {}).get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)
        return int(total or 0)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> SearchResult:
        hits = [
            SearchHit(id=str(hit["_id"]), rank=position, score=hit.get("_score"))
            for position, hit in enumerate(response.get("hits", {}).get("hits", []))
        ]
        return cls(hits=hits, total=cls.total_from_response(response), raw=response)

    @property
    def ids(self) -> list[str]:
        return [hit.id for hit in self.hits]

    def positions(self) -> dict[str, int]:
        """Map each identifier to its rank position."""
        return {hit.id: hit.rank for hit in self.hits}
