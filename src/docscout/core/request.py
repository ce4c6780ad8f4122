"""Search request builder.

A ``SearchRequest`` collects everything needed for one search against one
record type: free-text query, clauses, sort, pagination, soft-delete
visibility, index override and eager-load relations. It is single-use and
not safe to share between concurrent operations.

Usage::

    results = (
        engine.query(Product, "red shoes")
        .where("in_stock", True)
        .order_by("price", "asc")
        .from_(20)
        .size(10)
        .get()
    )
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from docscout.core.exceptions import RecordNotFoundError
from docscout.dsl.builder import BoolType, QueryFragmentBuilder
from docscout.dsl.registry import Extension, ExtensionRegistry
from docscout.dsl.sort import FieldSort
from docscout.models.pagination import Paginator

if TYPE_CHECKING:
    from docscout.core.engine import SearchEngine
    from docscout.core.searchable import Searchable

SearchCallback = Callable[[Any, dict[str, Any]], Any]
"""Replaces default dispatch; receives the backend client and the request parameters."""


class SoftDeleteMode(str, Enum):
    """Which records are visible with respect to the deleted-at marker."""

    ACTIVE_ONLY = "active_only"
    INCLUDE_TRASHED = "include_trashed"
    TRASHED_ONLY = "trashed_only"


class SearchRequest:
    """Fluent builder for a single search against one record type.

    Args:
        model: The searchable record type.
        engine: Engine that executes terminal operations.
        query: Free-text query; seeds a ``must`` query-string clause when non-empty.
        callback: Optional function replacing default dispatch.
        soft_delete: Hide soft-deleted records by default. Falls back to
            ``model.soft_deletes`` when None.
    """

    extensions: ClassVar[ExtensionRegistry] = ExtensionRegistry("request")

    def __init__(
        self,
        model: type[Searchable],
        engine: SearchEngine,
        query: str | None = None,
        callback: SearchCallback | None = None,
        soft_delete: bool | None = None,
    ) -> None:
        self.model = model
        self.engine = engine
        self.query_text = query
        self.callback = callback
        self.query_callback: Callable[[Any], Any] | None = None
        self.index: str | None = None
        self._raw: dict[str, Any] | None = None
        self._with: list[str] = []
        self._fragment = QueryFragmentBuilder()

        if query:
            self._fragment.query_string(query)

        if soft_delete is None:
            soft_delete = model.soft_deletes
        self.soft_delete_mode = SoftDeleteMode.ACTIVE_ONLY if soft_delete else SoftDeleteMode.INCLUDE_TRASHED

    @classmethod
    def extend(cls, name: str, func: Extension) -> None:
        """Register ``func`` as a request-level operation reachable via ``call()``."""
        cls.extensions.register(name, func)

    # ── Fragment builder delegation ──────────────────────────────────────

    @property
    def fragment(self) -> QueryFragmentBuilder:
        return self._fragment

    def where(self, field: str, value: Any) -> SearchRequest:
        """Filter on an exact term."""
        self._fragment.term(field, value)
        return self

    def where_not(self, field: str, value: Any) -> SearchRequest:
        self._fragment.term(field, value, BoolType.MUST_NOT)
        return self

    def where_in(self, field: str, values: list[Any]) -> SearchRequest:
        self._fragment.terms(field, values)
        return self

    def where_between(self, field: str, low: Any, high: Any) -> SearchRequest:
        """Filter on an inclusive range."""
        self._fragment.range(field, gte=low, lte=high)
        return self

    def where_exists(self, field: str) -> SearchRequest:
        self._fragment.exists(field)
        return self

    def match(self, field: str, value: Any, **options: Any) -> SearchRequest:
        self._fragment.match(field, value, **options)
        return self

    def query_string(self, text: str, **options: Any) -> SearchRequest:
        self._fragment.query_string(text, **options)
        return self

    def add_query(self, clause: dict[str, Any], bool_type: BoolType | str = BoolType.MUST) -> SearchRequest:
        self._fragment.add_query(clause, bool_type)
        return self

    def dsl(self, func: Callable[[QueryFragmentBuilder], Any]) -> SearchRequest:
        """Hand the fragment builder to ``func`` for direct manipulation."""
        func(self._fragment)
        return self

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Run a named operation.

        Fragment builder operations (built in or registered on the fragment
        builder) are tried first, then request-level extensions. Fragment
        operations return this request; request extensions return whatever
        the extension returns, or this request when that is None.
        """
        if self._fragment.supports(name):
            self._fragment.call(name, *args, **kwargs)
            return self
        result = self.extensions.get(name)(self, *args, **kwargs)
        return self if result is None else result

    # ── Pagination and scoring ───────────────────────────────────────────

    def from_(self, value: int) -> SearchRequest:
        """Set the offset of the first hit. Negative values clamp to 0."""
        self._fragment.set_from(max(0, value))
        return self

    def skip(self, value: int) -> SearchRequest:
        return self.from_(value)

    def offset(self, value: int) -> SearchRequest:
        return self.from_(value)

    def size(self, value: int) -> SearchRequest:
        """Set the page size. Negative values are ignored."""
        if value >= 0:
            self._fragment.set_size(value)
        return self

    def take(self, value: int) -> SearchRequest:
        return self.limit(value)

    def limit(self, value: int) -> SearchRequest:
        return self.size(value)

    def min_score(self, value: float) -> SearchRequest:
        """Drop hits scoring below ``value``. Negative values are ignored."""
        if value >= 0:
            self._fragment.set_min_score(value)
        return self

    @property
    def from_value(self) -> int | None:
        return self._fragment.from_

    @property
    def size_value(self) -> int | None:
        return self._fragment.size

    def order_by(self, field: str, direction: str | None = None, **options: Any) -> SearchRequest:
        """Append a sort on ``field``.

        Args:
            field: Field to sort on.
            direction: ``'asc'``, ``'desc'`` or None for the backend default.
            **options: ``nested``, ``missing``, ``unmapped_type`` and ``mode``
                (``min``, ``max``, ``sum``, ``avg``, ``median``).
        """
        self._fragment.add_sort(FieldSort(field=field, order=direction, **options))
        return self

    # ── Target and overrides ─────────────────────────────────────────────

    def within(self, index: str) -> SearchRequest:
        """Search ``index`` instead of the record type's default index."""
        self.index = index
        return self

    def raw(self, document: dict[str, Any]) -> SearchRequest:
        """Send ``document`` as the body, ignoring every clause on this request."""
        self._raw = document
        return self

    @property
    def raw_document(self) -> dict[str, Any] | None:
        return self._raw

    def query(self, callback: Callable[[Any], Any]) -> SearchRequest:
        """Set a callback the record store may use to narrow its record lookup."""
        self.query_callback = callback
        return self

    # ── Soft deletes ─────────────────────────────────────────────────────

    def with_trashed(self) -> SearchRequest:
        """Include soft-deleted records."""
        self.soft_delete_mode = SoftDeleteMode.INCLUDE_TRASHED
        return self

    def only_trashed(self) -> SearchRequest:
        """Return soft-deleted records only."""
        self.soft_delete_mode = SoftDeleteMode.TRASHED_ONLY
        return self

    # ── Eager loading ────────────────────────────────────────────────────

    def with_(self, relations: str | list[str]) -> SearchRequest:
        """Eager-load ``relations`` on the records returned by ``get()``/``paginate()``."""
        if isinstance(relations, str):
            self._with.append(relations)
        else:
            self._with.extend(relations)
        return self

    @property
    def relations(self) -> list[str]:
        return list(self._with)

    # ── Conditional building ─────────────────────────────────────────────

    def when(
        self,
        value: Any,
        callback: Callable[[SearchRequest, Any], Any],
        default: Callable[[SearchRequest, Any], Any] | None = None,
    ) -> Any:
        """Apply ``callback`` when ``value`` is truthy, else ``default`` if given."""
        if value:
            return callback(self, value) or self
        if default:
            return default(self, value) or self
        return self

    def tap(self, callback: Callable[[SearchRequest, Any], Any]) -> Any:
        return self.when(True, callback)

    # ── Rendering ────────────────────────────────────────────────────────

    def render(self) -> dict[str, Any]:
        """Render the request body.

        A deep copy of the raw document set with ``raw()`` is returned
        unchanged. Otherwise the soft-delete predicate for the current mode
        is added to a copy of the fragment builder before rendering.
        """
        if self._raw is not None:
            return copy.deepcopy(self._raw)

        if self.soft_delete_mode is SoftDeleteMode.INCLUDE_TRASHED:
            return self._fragment.render()

        fragment = self._fragment.clone()
        bool_type = BoolType.MUST_NOT if self.soft_delete_mode is SoftDeleteMode.ACTIVE_ONLY else BoolType.FILTER
        fragment.exists(self.model.deleted_at_column, bool_type)
        return fragment.render()

    to_dict = render

    # ── Terminal operations ──────────────────────────────────────────────

    def get_raw(self) -> dict[str, Any]:
        """Run the search and return the raw backend response."""
        return self.engine.search(self)

    def keys(self) -> list[str]:
        """Identifiers of the matching documents, in rank order."""
        return self.engine.keys(self)

    def get(self) -> list[Searchable]:
        """Run the search and return the matching records in rank order."""
        records = self.engine.get(self)
        self._load_relations(records)
        return records

    def first(self) -> Searchable:
        """Return the top-ranked record.

        Raises:
            RecordNotFoundError: If the search matches nothing.
        """
        records = self.limit(1).get()
        if not records:
            raise RecordNotFoundError(
                f"No {self.model.__name__} record matches the search in index '{self.target_index()}'"
            )
        return records[0]

    def count(self) -> int:
        return self.engine.count(self)

    def paginate(self, per_page: int | None = None, page: int | None = None, page_name: str = "page") -> Paginator:
        """Fetch one page of records.

        Args:
            per_page: Page size. Defaults to ``model.per_page``, then
                ``engine.per_page``.
            page: 1-based page number. Defaults to 1.
            page_name: Query parameter name used in page links.
        """
        per_page = per_page or self.model.per_page or self.engine.per_page
        page = page or 1

        raw = self.engine.paginate(self, per_page, page)
        records = self.engine.map(self, raw, self.model)
        self._load_relations(records)

        return Paginator(
            items=records,
            total=self.engine.get_total_count(raw),
            per_page=per_page,
            current_page=page,
            page_name=page_name,
            query=self.query_text,
            raw=raw,
        )

    def paginate_raw(self, per_page: int | None = None, page: int | None = None, page_name: str = "page") -> Paginator:
        """Fetch one page of raw hits without loading records."""
        per_page = per_page or self.model.per_page or self.engine.per_page
        page = page or 1

        raw = self.engine.paginate(self, per_page, page)

        return Paginator(
            items=list(raw.get("hits", {}).get("hits", [])),
            total=self.engine.get_total_count(raw),
            per_page=per_page,
            current_page=page,
            page_name=page_name,
            query=self.query_text,
            raw=raw,
        )

    # ── Helpers ──────────────────────────────────────────────────────────

    def target_index(self) -> str:
        return self.index or self.model.searchable_as()

    def _load_relations(self, records: list[Searchable]) -> None:
        if self._with and records:
            self.model.load_relations(records, self.relations)

    def __repr__(self) -> str:
        return f"SearchRequest(model={self.model.__name__}, query={self.query_text!r}, index={self.target_index()!r})"
