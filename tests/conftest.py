"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, ClassVar
from unittest.mock import MagicMock

import pytest

from docscout.config.settings import Settings
from docscout.core.engine import SearchEngine
from docscout.core.request import SearchRequest
from docscout.core.searchable import Searchable

# ── Fake record types ────────────────────────────────────────────────────────


class Product(Searchable):
    """In-memory record type. ``store`` plays the role of the record store."""

    search_index = "products"
    store: ClassVar[dict[str, Product]] = {}
    lookups: ClassVar[list[list[str]]] = []

    def __init__(self, pk: int, name: str, indexable: bool = True) -> None:
        self.pk = pk
        self.name = name
        self.indexable = indexable
        self.loaded: list[str] = []

    @property
    def scout_key(self) -> int:
        return self.pk

    def to_search_document(self) -> dict[str, Any]:
        return {"name": self.name} if self.indexable else {}

    @classmethod
    def get_scout_models_by_ids(cls, request: SearchRequest, ids: Sequence[str]) -> Iterable[Product]:
        cls.lookups.append(list(ids))
        # Ascending key order, deliberately unrelated to rank order.
        found = [cls.store[i] for i in ids if i in cls.store]
        return sorted(found, key=lambda record: record.pk)

    @classmethod
    def load_relations(cls, records: list[Searchable], relations: list[str]) -> None:
        for record in records:
            record.loaded.extend(relations)  # type: ignore[attr-defined]

    @classmethod
    def iter_searchable(cls, chunk_size: int) -> Iterable[list[Searchable]]:
        records = sorted(cls.store.values(), key=lambda record: record.pk)
        for start in range(0, len(records), chunk_size):
            yield list(records[start : start + chunk_size])


class Article(Product):
    """Record type using soft deletes."""

    search_index = "articles"
    soft_deletes = True
    deleted_at_column = "removed_at"
    per_page = 5
    search_settings = {"index": {"number_of_replicas": 1}, "analysis": {}}
    search_mapping = {"properties": {"title": {"type": "text"}}}


class Bare(Searchable):
    """Record type without the opt-in eager loading and import capabilities."""

    def __init__(self, pk: int) -> None:
        self.pk = pk

    @property
    def scout_key(self) -> int:
        return self.pk

    def to_search_document(self) -> dict[str, Any]:
        return {"id": self.pk}

    @classmethod
    def get_scout_models_by_ids(cls, request: SearchRequest, ids: Sequence[str]) -> Iterable[Bare]:
        return [Bare(int(i)) for i in ids]


# ── Response builders ────────────────────────────────────────────────────────


def search_response(ids: list[str], total: int | None = None) -> dict[str, Any]:
    """Backend search response with hits in the given rank order."""
    return {
        "took": 3,
        "hits": {
            "total": {"value": len(ids) if total is None else total, "relation": "eq"},
            "hits": [{"_index": "products", "_id": i, "_score": 10.0 - n} for n, i in enumerate(ids)],
        },
    }


# ── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def client() -> MagicMock:
    """Backend client double."""
    mock = MagicMock()
    mock.search.return_value = search_response([])
    mock.count.return_value = {"count": 0}
    mock.bulk.return_value = {"errors": False, "items": []}
    return mock


@pytest.fixture
def engine(client: MagicMock) -> SearchEngine:
    return SearchEngine(client)


@pytest.fixture
def product_cls() -> type[Product]:
    Product.store = {}
    Product.lookups = []
    return Product


@pytest.fixture
def article_cls() -> type[Article]:
    Article.store = {}
    Article.lookups = []
    return Article


@pytest.fixture
def bare_cls() -> type[Bare]:
    return Bare


@pytest.fixture
def products(product_cls: type[Product]) -> dict[str, Product]:
    """Three stored products keyed by identifier string."""
    product_cls.store = {str(pk): Product(pk, name) for pk, name in [(1, "boots"), (2, "sandals"), (3, "sneakers")]}
    return product_cls.store


@pytest.fixture
def make_response() -> Any:
    """Factory for backend search responses, see ``search_response``."""
    return search_response
