"""Field sort clause."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SortOrder = Literal["asc", "desc"]
SortMode = Literal["min", "max", "sum", "avg", "median"]


class FieldSort(BaseModel):
    """Sort by a single field.

    ``order`` left unset defers to the backend default for the field
    (``desc`` for ``_score``, ``asc`` otherwise). ``mode`` picks the value
    used for multi-valued fields.
    """

    model_config = ConfigDict(extra="forbid")

    field: str = Field(description="Field to sort on")
    order: SortOrder | None = Field(default=None, description="Sort direction")
    nested: dict[str, Any] | None = Field(default=None, description="Nested path/filter for nested fields")
    missing: Any = Field(default=None, description="Placement or value for documents missing the field")
    unmapped_type: str | None = Field(default=None, description="Type assumed when the field is unmapped")
    mode: SortMode | None = Field(default=None, description="Aggregation for multi-valued fields")

    def to_dict(self) -> dict[str, Any]:
        params = self.model_dump(exclude={"field"}, exclude_none=True)
        return {self.field: params}
