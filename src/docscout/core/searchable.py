"""Searchable record contract.

Domain records that should be indexed implement this interface. The record
store itself (ORM, repository, whatever the application uses) stays outside
DocScout; the engine only reaches it through ``get_scout_models_by_ids``,
``load_relations`` and ``iter_searchable``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from docscout.core.exceptions import UnsupportedOperationError

if TYPE_CHECKING:
    from docscout.core.engine import SearchEngine
    from docscout.core.request import SearchRequest


class Searchable(ABC):
    """Abstract base class for indexable records.

    Subclasses must implement:
      - scout_key: the identifier used as the document ``_id``
      - to_search_document(): the searchable projection of the record
      - get_scout_models_by_ids(): bulk lookup of records by identifier

    Class attributes tune indexing behaviour:
      - search_index: index name (defaults to the lowercased class name)
      - soft_deletes: whether the record type uses a deleted-at marker
      - deleted_at_column: field holding that marker in the document
      - per_page: default page size for ``paginate()`` (falls back to the engine's)
      - search_settings / search_mapping: used by index administration

    Subclasses may implement, as opt-in capabilities:
      - load_relations(): needed once a request uses ``with_()``
      - iter_searchable(): needed by ``Importer`` and the ``import`` command

    Without them those paths raise ``UnsupportedOperationError``.
    """

    search_index: ClassVar[str | None] = None
    soft_deletes: ClassVar[bool] = False
    deleted_at_column: ClassVar[str] = "deleted_at"
    per_page: ClassVar[int | None] = None
    search_settings: ClassVar[dict[str, Any]] = {}
    search_mapping: ClassVar[dict[str, Any]] = {}

    @classmethod
    def searchable_as(cls) -> str:
        """Name of the index this record type is stored in."""
        return cls.search_index or cls.__name__.lower()

    @property
    @abstractmethod
    def scout_key(self) -> Any:
        """Identifier stored as the document ``_id``."""

    @abstractmethod
    def to_search_document(self) -> dict[str, Any]:
        """Searchable projection of this record.

        Returns:
            Field name to indexable value. An empty mapping means the record
            is not indexed.
        """

    @classmethod
    @abstractmethod
    def get_scout_models_by_ids(cls, request: SearchRequest, ids: Sequence[str]) -> Iterable[Searchable]:
        """Load the records for the given identifiers, in any order.

        Identifiers that no longer resolve are simply absent from the result.
        Implementations should apply ``request.query_callback`` to their
        lookup when it is set.
        """

    @classmethod
    def load_relations(cls, records: list[Searchable], relations: list[str]) -> None:
        """Eager-load ``relations`` onto ``records`` in place."""
        raise UnsupportedOperationError(f"{cls.__name__} does not support eager loading relations {relations}")

    @classmethod
    def iter_searchable(cls, chunk_size: int) -> Iterable[list[Searchable]]:
        """Yield every indexable record in chunks of at most ``chunk_size``."""
        raise UnsupportedOperationError(f"{cls.__name__} does not support bulk import")

    @classmethod
    def search(
        cls,
        engine: SearchEngine,
        query: str | None = None,
        callback: Callable[[Any, dict[str, Any]], Any] | None = None,
    ) -> SearchRequest:
        """Start a search request for this record type."""
        return engine.query(cls, query, callback=callback)
