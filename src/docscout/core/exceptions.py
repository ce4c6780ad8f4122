"""Library exceptions.

Backend transport errors are never wrapped; they propagate from the
``opensearchpy`` client as-is. Everything raised by DocScout itself derives
from ``ScoutError``.
"""


class ScoutError(Exception):
    """Base exception for DocScout errors."""


class ConfigurationError(ScoutError):
    """Raised when configuration is invalid or incomplete."""


class RecordNotFoundError(ScoutError):
    """Raised when a search that must yield a record yields none."""


class UnknownOperationError(ScoutError, AttributeError):
    """Raised when a named operation is neither built in nor registered."""


class InvalidPaginationError(ScoutError, ValueError):
    """Raised when a page number or page size is out of range."""


class IndexLogicError(ScoutError):
    """Base exception for index lifecycle precondition failures."""


class IndexAlreadyExistsError(IndexLogicError):
    """Raised when creating an index that already exists."""


class IndexNotFoundError(IndexLogicError):
    """Raised when operating on an index that does not exist."""


class MappingNotSpecifiedError(IndexLogicError):
    """Raised when a mapping update is requested without a mapping."""


class UnsupportedOperationError(ScoutError, NotImplementedError):
    """Raised when a record type lacks an opt-in capability such as eager loading or bulk import."""
