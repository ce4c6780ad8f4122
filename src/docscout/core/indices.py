"""Index administration: create, drop and update indices for record types.

Each operation checks its precondition first and fails with an
``IndexLogicError`` subclass instead of letting the backend reject the call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from docscout.core.exceptions import IndexAlreadyExistsError, IndexNotFoundError, MappingNotSpecifiedError

if TYPE_CHECKING:
    from docscout.core.searchable import Searchable

logger = logging.getLogger(__name__)


class IndexManager:
    """Manages the backend index behind each record type.

    Args:
        client: Backend client, typically ``SearchEngine.client``.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def exists(self, model: type[Searchable]) -> bool:
        return bool(self._client.indices.exists(index=model.searchable_as()))

    def create(self, model: type[Searchable]) -> str:
        """Create the index with the record type's settings and mapping.

        Raises:
            IndexAlreadyExistsError: If the index already exists.
        """
        index = model.searchable_as()
        if self.exists(model):
            raise IndexAlreadyExistsError(f"The index {index} already exists")

        body: dict[str, Any] = {}
        if model.search_settings:
            body["settings"] = model.search_settings
        if model.search_mapping:
            body["mappings"] = model.search_mapping

        if body:
            self._client.indices.create(index=index, body=body)
        else:
            self._client.indices.create(index=index)
        logger.info("Created index %s", index)
        return index

    def drop(self, model: type[Searchable]) -> str:
        """Delete the index.

        Raises:
            IndexNotFoundError: If the index does not exist.
        """
        index = self._existing_index(model)
        self._client.indices.delete(index=index)
        logger.info("Deleted index %s", index)
        return index

    def update(self, model: type[Searchable]) -> str:
        """Apply the record type's ``settings["index"]`` to the existing index.

        Static settings can only change on a closed index, so the index is
        closed for the update and reopened afterwards, also when the update
        fails.

        Raises:
            IndexNotFoundError: If the index does not exist.
        """
        index = self._existing_index(model)

        self._client.indices.close(index=index)
        try:
            if model.search_settings:
                self._client.indices.put_settings(
                    index=index,
                    body={"settings": model.search_settings.get("index", {})},
                )
        finally:
            self._client.indices.open(index=index)

        logger.info("Updated index %s", index)
        return index

    def update_mapping(self, model: type[Searchable]) -> str:
        """Put the record type's mapping on the existing index.

        Raises:
            MappingNotSpecifiedError: If the record type defines no mapping.
            IndexNotFoundError: If the index does not exist.
        """
        if not model.search_mapping:
            raise MappingNotSpecifiedError("Nothing to update: the mapping is not specified.")

        index = self._existing_index(model)
        self._client.indices.put_mapping(index=index, body=model.search_mapping)
        logger.info("Updated mapping of index %s", index)
        return index

    def _existing_index(self, model: type[Searchable]) -> str:
        index = model.searchable_as()
        if not self.exists(model):
            raise IndexNotFoundError(f"The index {index} does not exist")
        return index
