"""Search engine: executes search requests and keeps the index in sync.

The engine holds nothing but a backend client and the refresh policy, so a
single instance can serve any number of concurrent requests. It:
  1. Dispatches search and count calls built from a ``SearchRequest``
  2. Maps ranked hit identifiers back onto records, preserving rank order
  3. Sends batched upserts and deletes, and flushes whole indices
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from docscout.core.exceptions import InvalidPaginationError
from docscout.core.request import SearchCallback, SearchRequest
from docscout.models.bulk import BulkOperation
from docscout.models.result import SearchResult

if TYPE_CHECKING:
    from docscout.config.settings import Settings
    from docscout.core.searchable import Searchable

logger = logging.getLogger(__name__)

# Keys the count API rejects in a request body.
_NON_COUNT_KEYS = ("from", "size", "sort", "min_score")


class SearchEngine:
    """Executes search requests against an OpenSearch/Elasticsearch backend.

    Args:
        client: Backend client (``opensearchpy.OpenSearch`` or compatible).
        document_refresh: Block writes until the affected documents are
            searchable. Applies to ``update``, ``delete`` and ``flush``.
        per_page: Page size used by ``paginate()`` when neither the call nor
            the record type sets one.
    """

    def __init__(self, client: Any, document_refresh: bool = True, per_page: int = 15) -> None:
        self._client = client
        self.document_refresh = document_refresh
        self.per_page = per_page

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchEngine:
        """Build a client from ``settings.backend`` and wrap it in an engine."""
        from docscout.backend.client import create_client

        return cls(
            create_client(settings.backend),
            document_refresh=settings.indexing.document_refresh,
            per_page=settings.indexing.per_page,
        )

    @property
    def client(self) -> Any:
        """The backend client, for index administration and other tooling."""
        return self._client

    def query(
        self,
        model: type[Searchable],
        text: str | None = None,
        callback: SearchCallback | None = None,
        soft_delete: bool | None = None,
    ) -> SearchRequest:
        """Start a search request for ``model`` executed by this engine."""
        return SearchRequest(model, self, text, callback=callback, soft_delete=soft_delete)

    # ── Indexing ─────────────────────────────────────────────────────────

    def update(self, records: Iterable[Searchable]) -> dict[str, Any] | None:
        """Upsert ``records`` into their indices in one bulk call.

        Records whose searchable projection is empty are skipped.

        Returns:
            The raw bulk response, or None when there was nothing to send.
            Per-item failures are reported inside the response, not raised.
        """
        operation = BulkOperation()
        for record in records:
            doc = record.to_search_document()
            if not doc:
                continue
            operation.upsert(record.searchable_as(), record.scout_key, doc)

        if not operation.actions:
            return None

        return self._bulk(operation)

    def delete(self, records: Iterable[Searchable]) -> dict[str, Any] | None:
        """Remove ``records`` from their indices in one bulk call."""
        operation = BulkOperation()
        for record in records:
            operation.delete(record.searchable_as(), record.scout_key)

        if not operation.actions:
            return None

        return self._bulk(operation)

    def flush(self, model: type[Searchable]) -> dict[str, Any]:
        """Delete every document in the record type's index."""
        index = model.searchable_as()
        logger.info("Flushing all documents from index %s", index)
        return self._client.delete_by_query(
            index=index,
            body={"query": {"match_all": {}}},
            refresh=self.document_refresh,
        )

    # ── Searching ────────────────────────────────────────────────────────

    def search(self, request: SearchRequest) -> Any:
        """Run ``request``, forwarding ``from``/``size`` only when an offset is set."""
        from_ = request.from_value
        options = {"size": request.size_value, "from": from_} if from_ is not None else {}
        return self.perform_search(request, options)

    def paginate(self, request: SearchRequest, per_page: int, page: int) -> Any:
        """Run ``request`` for a 1-based ``page``, overriding any offset set on it.

        Raises:
            InvalidPaginationError: If ``page`` or ``per_page`` is below 1.
        """
        if page < 1 or per_page < 1:
            raise InvalidPaginationError(f"Cannot paginate with page={page}, per_page={per_page}")
        return self.perform_search(request, {"from": (page - 1) * per_page, "size": per_page})

    def count(self, request: SearchRequest) -> int:
        """Number of documents matching ``request``. A missing count reads as 0."""
        result = self.perform_count(request)
        count = result.get("count") if isinstance(result, dict) else None
        return int(count) if count is not None else 0

    def keys(self, request: SearchRequest) -> list[str]:
        return self.map_ids(self.search(request))

    def get(self, request: SearchRequest) -> list[Searchable]:
        return self.map(request, self.search(request), request.model)

    def perform_search(self, request: SearchRequest, options: dict[str, Any] | None = None) -> Any:
        """Assemble search parameters and dispatch them.

        When the request carries a callback, the callback receives the client
        and the parameters and its return value is returned as-is.
        """
        options = options or {}
        params: dict[str, Any] = {
            "index": request.target_index(),
            "body": request.render(),
            "ignore_throttled": False,
        }
        if options.get("size") is not None:
            params["size"] = options["size"]
        if options.get("from") is not None:
            params["from"] = options["from"]

        if request.callback:
            logger.debug("Search on %s delegated to request callback", params["index"])
            return request.callback(self._client, params)

        logger.debug("Searching index %s (from=%s, size=%s)", params["index"], params.get("from"), params.get("size"))
        return self._client.search(**self._client_kwargs(params))

    def perform_count(self, request: SearchRequest) -> Any:
        body = request.render()
        if request.raw_document is None:
            body = {k: v for k, v in body.items() if k not in _NON_COUNT_KEYS}

        params: dict[str, Any] = {
            "index": request.target_index(),
            "body": body,
            "ignore_throttled": False,
        }

        if request.callback:
            logger.debug("Count on %s delegated to request callback", params["index"])
            return request.callback(self._client, params)

        logger.debug("Counting index %s", params["index"])
        return self._client.count(**params)

    # ── Result mapping ───────────────────────────────────────────────────

    def map(self, request: SearchRequest, results: dict[str, Any], model: type[Searchable]) -> list[Searchable]:
        """Load the records behind ``results`` in backend rank order.

        Records whose identifier is not among the hits are dropped, and hits
        whose record no longer exists leave no gap.
        """
        if self.get_total_count(results) == 0:
            return []

        parsed = SearchResult.from_response(results)
        positions = parsed.positions()
        if not positions:
            return []

        records = [
            record
            for record in model.get_scout_models_by_ids(request, parsed.ids)
            if str(record.scout_key) in positions
        ]
        records.sort(key=lambda record: positions[str(record.scout_key)])
        return records

    def map_ids(self, results: dict[str, Any]) -> list[str]:
        """Hit identifiers in backend rank order."""
        return SearchResult.from_response(results).ids

    def get_total_count(self, results: dict[str, Any]) -> int:
        return SearchResult.total_from_response(results)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _bulk(self, operation: BulkOperation) -> dict[str, Any]:
        logger.debug("Sending bulk request with %d actions", len(operation))
        response = self._client.bulk(body=operation.to_body(), refresh=self.document_refresh)
        if isinstance(response, dict) and response.get("errors"):
            logger.warning("Bulk request reported item failures (%d actions sent)", len(operation))
        return response

    @staticmethod
    def _client_kwargs(params: dict[str, Any]) -> dict[str, Any]:
        """Translate wire-level parameter names to client keyword arguments."""
        kwargs = dict(params)
        if "from" in kwargs:
            kwargs["from_"] = kwargs.pop("from")
        return kwargs
