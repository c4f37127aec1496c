"""
Expense Record Model

An expense is a small value record: an identity, a label, a free-text
category and an amount. Nothing beyond the shape is validated; empty
names and zero or negative amounts are accepted as entered.
"""

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# Suggested categories for entry forms. Not enforced on ExpenseItem.type.
EXPENSE_TYPES = ("Business", "Personal")


class ExpenseItem(BaseModel):
    """
    A single tracked expenditure.

    Frozen once built. The id exists only so consumers can tell
    records apart when diffing lists; it carries no meaning.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Identity of this record"
    )
    name: str = Field(
        ...,
        description="Free-text label"
    )
    type: str = Field(
        ...,
        description="Free-text category (e.g. 'Personal', 'Business')"
    )
    amount: float = Field(
        ...,
        description="Amount in the display currency"
    )

    def to_storage_dict(self) -> dict:
        """Convert to the plain mapping written to storage."""
        return {
            "id": str(self.id),
            "name": self.name,
            "type": self.type,
            "amount": self.amount,
        }
