"""
Store Change Events

Every mutation of an ExpenseStore produces one StoreChange, handed to
each subscribed observer after the new list has been written out.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from iexpense.models.expense import ExpenseItem


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChangeType(str, Enum):
    """Kinds of mutation a store reports."""
    ADDED = "added"
    REMOVED = "removed"


class StoreChange(BaseModel):
    """
    A single mutation of the expense list.

    For ADDED, offsets holds the index the new record landed at.
    For REMOVED, offsets holds the removed positions in ascending
    order and items the removed records in the same order.
    """
    model_config = ConfigDict(frozen=True)

    change_id: UUID = Field(
        default_factory=uuid4,
        description="Unique change identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the change was applied (UTC)"
    )
    change_type: ChangeType
    items: tuple[ExpenseItem, ...] = Field(
        default=(),
        description="Records added or removed"
    )
    offsets: tuple[int, ...] = Field(
        default=(),
        description="Positions touched by the change"
    )
    count: int = Field(
        ...,
        ge=0,
        description="Number of records in the store after the change"
    )
    persisted: bool = Field(
        default=True,
        description="Whether the updated list reached storage"
    )

    def to_log_dict(self) -> dict[str, Any]:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "change_id": str(self.change_id),
            "timestamp": self.timestamp.isoformat(),
            "change_type": self.change_type.value,
            "item_ids": [str(item.id) for item in self.items],
            "offsets": list(self.offsets),
            "count": self.count,
            "persisted": self.persisted,
        }
