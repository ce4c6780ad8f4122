"""Bulk import of every record of a type into its index."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from docscout.models.events import ModelsImported

if TYPE_CHECKING:
    from docscout.core.engine import SearchEngine
    from docscout.core.searchable import Searchable

logger = logging.getLogger(__name__)

ImportListener = Callable[[ModelsImported], None]


class Importer:
    """Sends all records of a type to the index, one bulk call per chunk.

    Args:
        engine: Engine used for the bulk upserts.
        on_imported: Called with a ``ModelsImported`` event after each chunk.
    """

    def __init__(self, engine: SearchEngine, on_imported: ImportListener | None = None) -> None:
        self.engine = engine
        self.on_imported = on_imported

    def import_all(self, model: type[Searchable], chunk_size: int = 500) -> int:
        """Import every record of ``model``.

        Returns:
            Number of records processed, including ones with empty projections.
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        processed = 0
        for chunk in model.iter_searchable(chunk_size):
            records = list(chunk)
            if not records:
                continue
            self.engine.update(records)
            processed += len(records)
            logger.debug("Imported %d %s records (%d total)", len(records), model.__name__, processed)
            if self.on_imported:
                self.on_imported(ModelsImported(records=records))

        logger.info("Imported %d %s records into %s", processed, model.__name__, model.searchable_as())
        return processed
