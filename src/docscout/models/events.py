"""Import progress events."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ModelsImported(BaseModel):
    """Emitted after one batch of records has been sent to the index."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    records: list[Any] = Field(default_factory=list, description="Records in the imported batch")

    @property
    def last_key(self) -> Any:
        """Scout key of the last record in the batch, or None for an empty batch."""
        return self.records[-1].scout_key if self.records else None
