"""Bulk mutation models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class BulkAction(BaseModel):
    """A single upsert or delete keyed by (index, id)."""

    action: Literal["update", "delete"] = Field(description="Bulk action type")
    index: str = Field(description="Target index name")
    id: str = Field(description="Document identifier")
    doc: dict[str, Any] | None = Field(default=None, description="Projection to upsert (update only)")

    def to_lines(self) -> list[dict[str, Any]]:
        """Render as bulk body entries: metadata, then the document for upserts."""
        lines: list[dict[str, Any]] = [{self.action: {"_index": self.index, "_id": self.id}}]
        if self.action == "update":
            lines.append({"doc": self.doc or {}, "doc_as_upsert": True})
        return lines


class BulkOperation(BaseModel):
    """A batch of bulk actions sent in one network call."""

    actions: list[BulkAction] = Field(default_factory=list)

    def upsert(self, index: str, doc_id: Any, doc: dict[str, Any]) -> None:
        self.actions.append(BulkAction(action="update", index=index, id=str(doc_id), doc=doc))

    def delete(self, index: str, doc_id: Any) -> None:
        self.actions.append(BulkAction(action="delete", index=index, id=str(doc_id)))

    def to_body(self) -> list[dict[str, Any]]:
        body: list[dict[str, Any]] = []
        for action in self.actions:
            body.extend(action.to_lines())
        return body

    def __len__(self) -> int:
        return len(self.actions)
