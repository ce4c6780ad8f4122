"""Data models shared by the request builder and the engine."""

from docscout.models.bulk import BulkAction, BulkOperation
from docscout.models.events import ModelsImported
from docscout.models.pagination import Paginator
from docscout.models.result import SearchHit, SearchResult

__all__ = ["BulkAction", "BulkOperation", "ModelsImported", "Paginator", "SearchHit", "SearchResult"]
