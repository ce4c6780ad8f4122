"""Request builder, execution engine and index tooling."""

from docscout.core.engine import SearchEngine
from docscout.core.importer import Importer
from docscout.core.indices import IndexManager
from docscout.core.request import SearchRequest, SoftDeleteMode
from docscout.core.searchable import Searchable

__all__ = ["Importer", "IndexManager", "SearchEngine", "SearchRequest", "Searchable", "SoftDeleteMode"]
