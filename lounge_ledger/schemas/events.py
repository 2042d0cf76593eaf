"""
Pydantic schemas for the business events the ledger consumes.

Orders and stock movements come from the POS. They are validated
into these shapes whether they arrive over HTTP or are read from
the POS tables by the sync job (from_attributes=True).
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from lounge_ledger.models.enums import (
    MovementType,
    MovementReferenceType,
    PostingStatus,
)


class OrderItemEvent(BaseModel):
    price: Decimal
    quantity: int = 1

    model_config = {"from_attributes": True}


class OrderEvent(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    status: str
    items: list[OrderItemEvent] = Field(default_factory=list)
    subtotal: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    total: Decimal | None = None
    timestamp: datetime | None = None

    model_config = {"from_attributes": True}

    @property
    def gross_total(self) -> Decimal:
        """
        Order total, or the sum of its items when no total was recorded.

        A recorded total of zero (a comped order) stays zero.
        """
        if self.total is not None:
            return self.total
        return sum(
            (item.price * item.quantity for item in self.items),
            Decimal("0"),
        )


class InventoryMovementEvent(BaseModel):
    id: int
    item_id: int
    item_name: str | None = None
    movement_type: MovementType
    quantity: Decimal
    unit_cost: Decimal | None = None
    total_cost: Decimal | None = None
    reference_type: MovementReferenceType | None = None
    movement_date: datetime | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}

    @property
    def cost(self) -> Decimal:
        """Recorded total cost, else quantity times unit cost."""
        if self.total_cost is not None:
            return self.total_cost
        return self.quantity * (self.unit_cost or Decimal("0"))


class PostingResult(BaseModel):
    """Outcome of mapping one business event to the ledger."""
    status: PostingStatus
    reference: str | None = None
    entry_id: int | None = None
    detail: str | None = None
