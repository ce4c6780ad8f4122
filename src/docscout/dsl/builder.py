"""Query fragment builder: accumulates clauses into a query-DSL document.

The builder owns a boolean query (``must`` / ``must_not`` / ``should`` /
``filter``), a sort list and the request-level ``from`` / ``size`` /
``min_score`` values. ``render()`` turns that state into the body sent to
the backend and never mutates the builder, so it can be called repeatedly.
"""

from __future__ import annotations

import copy
from enum import Enum
from typing import Any, ClassVar

from docscout.dsl.registry import Extension, ExtensionRegistry
from docscout.dsl.sort import FieldSort


class BoolType(str, Enum):
    """Occurrence type of a clause inside the boolean query."""

    MUST = "must"
    MUST_NOT = "must_not"
    SHOULD = "should"
    FILTER = "filter"


class QueryFragmentBuilder:
    """Accumulates filter, sort and range clauses plus a free-text query.

    Named operations in ``OPERATIONS`` are handled directly. Any other name
    passed to ``call()`` is resolved through the class-level extension
    registry, populated with ``QueryFragmentBuilder.extend()``.
    """

    OPERATIONS: ClassVar[frozenset[str]] = frozenset(
        {"query_string", "match", "term", "terms", "range", "exists", "add_query"}
    )
    extensions: ClassVar[ExtensionRegistry] = ExtensionRegistry("fragment")

    def __init__(self) -> None:
        self._clauses: dict[BoolType, list[dict[str, Any]]] = {bool_type: [] for bool_type in BoolType}
        self._sorts: list[FieldSort] = []
        self.from_: int | None = None
        self.size: int | None = None
        self.min_score: float | None = None

    @classmethod
    def extend(cls, name: str, func: Extension) -> None:
        """Register ``func`` as the named operation ``name``."""
        cls.extensions.register(name, func)

    # ── Clauses ──────────────────────────────────────────────────────────

    def add_query(self, clause: dict[str, Any], bool_type: BoolType | str = BoolType.MUST) -> QueryFragmentBuilder:
        """Add a raw DSL clause under the given occurrence type."""
        self._clauses[BoolType(bool_type)].append(clause)
        return self

    def query_string(
        self, text: str, bool_type: BoolType | str = BoolType.MUST, **options: Any
    ) -> QueryFragmentBuilder:
        return self.add_query({"query_string": {"query": text, **options}}, bool_type)

    def match(
        self, field: str, value: Any, bool_type: BoolType | str = BoolType.MUST, **options: Any
    ) -> QueryFragmentBuilder:
        body = {"query": value, **options} if options else value
        return self.add_query({"match": {field: body}}, bool_type)

    def term(
        self, field: str, value: Any, bool_type: BoolType | str = BoolType.FILTER, **options: Any
    ) -> QueryFragmentBuilder:
        body = {"value": value, **options} if options else value
        return self.add_query({"term": {field: body}}, bool_type)

    def terms(
        self, field: str, values: list[Any], bool_type: BoolType | str = BoolType.FILTER
    ) -> QueryFragmentBuilder:
        return self.add_query({"terms": {field: list(values)}}, bool_type)

    def range(
        self,
        field: str,
        *,
        gt: Any = None,
        gte: Any = None,
        lt: Any = None,
        lte: Any = None,
        bool_type: BoolType | str = BoolType.FILTER,
        **options: Any,
    ) -> QueryFragmentBuilder:
        bounds = {k: v for k, v in {"gt": gt, "gte": gte, "lt": lt, "lte": lte}.items() if v is not None}
        if not bounds:
            raise ValueError(f"range on '{field}' needs at least one bound")
        return self.add_query({"range": {field: {**bounds, **options}}}, bool_type)

    def exists(self, field: str, bool_type: BoolType | str = BoolType.FILTER) -> QueryFragmentBuilder:
        return self.add_query({"exists": {"field": field}}, bool_type)

    # ── Sort and paging ──────────────────────────────────────────────────

    def add_sort(self, sort: FieldSort) -> QueryFragmentBuilder:
        self._sorts.append(sort)
        return self

    def set_from(self, value: int) -> None:
        self.from_ = value

    def set_size(self, value: int) -> None:
        self.size = value

    def set_min_score(self, value: float) -> None:
        self.min_score = value

    # ── Dispatch ─────────────────────────────────────────────────────────

    def supports(self, name: str) -> bool:
        """Whether ``call(name)`` would resolve, built in or registered."""
        return name in self.OPERATIONS or name in self.extensions

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Run a named operation.

        Built-in operations are tried first; the extension registry is only
        consulted for names outside ``OPERATIONS``.

        Raises:
            UnknownOperationError: If the name is neither built in nor registered.
        """
        if name in self.OPERATIONS:
            return getattr(self, name)(*args, **kwargs)
        return self.extensions.get(name)(self, *args, **kwargs)

    # ── Rendering ────────────────────────────────────────────────────────

    def clone(self) -> QueryFragmentBuilder:
        return copy.deepcopy(self)

    def has_clauses(self) -> bool:
        return any(self._clauses.values())

    def render(self) -> dict[str, Any]:
        """Render the accumulated state as a query-DSL document."""
        body: dict[str, Any] = {}

        if self.has_clauses():
            bool_query = {
                bool_type.value: copy.deepcopy(clauses) for bool_type, clauses in self._clauses.items() if clauses
            }
            body["query"] = {"bool": bool_query}

        if self._sorts:
            body["sort"] = [sort.to_dict() for sort in self._sorts]

        if self.from_ is not None:
            body["from"] = self.from_
        if self.size is not None:
            body["size"] = self.size
        if self.min_score is not None:
            body["min_score"] = self.min_score

        return body
