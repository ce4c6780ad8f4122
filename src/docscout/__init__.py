"""DocScout: search request building and result reconciliation for document search backends."""

__version__ = "0.1.0"

from docscout.core import Importer, IndexManager, SearchEngine, SearchRequest, Searchable, SoftDeleteMode
from docscout.core.exceptions import RecordNotFoundError, ScoutError

__all__ = [
    "Importer",
    "IndexManager",
    "RecordNotFoundError",
    "ScoutError",
    "SearchEngine",
    "SearchRequest",
    "Searchable",
    "SoftDeleteMode",
    "__version__",
]
