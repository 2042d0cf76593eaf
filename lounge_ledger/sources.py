"""
Where the sync job reads business events from.

The POS owns orders and stock movements. The ledger only needs
two read accessors, described by OrderSource and MovementSource.
The Sql* implementations read the POS tables through the same
database session the ledger uses.
"""

from datetime import date, datetime, time, timedelta
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from lounge_ledger.models.enums import OrderStatus
from lounge_ledger.models.pos import InventoryMovement, Order
from lounge_ledger.schemas.events import InventoryMovementEvent, OrderEvent


class OrderSource(Protocol):
    def list_completed_orders(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> list[OrderEvent]:
        ...


class MovementSource(Protocol):
    def list_recent_movements(
        self,
        limit: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[InventoryMovementEvent]:
        ...


def _day_bounds(start_date: date | None, end_date: date | None):
    """Turn inclusive calendar dates into [start, end) datetimes."""
    start = datetime.combine(start_date, time.min) if start_date else None
    end = (
        datetime.combine(end_date + timedelta(days=1), time.min)
        if end_date else None
    )
    return start, end


class SqlOrderSource:

    def __init__(self, db: Session):
        self.db = db

    def list_completed_orders(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> list[OrderEvent]:
        """Completed orders, oldest first, optionally limited to a date range."""
        query = (
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.status == OrderStatus.COMPLETED.value)
        )
        start, end = _day_bounds(start_date, end_date)
        if start:
            query = query.where(Order.timestamp >= start)
        if end:
            query = query.where(Order.timestamp < end)

        orders = self.db.execute(query.order_by(Order.timestamp)).scalars().all()
        return [OrderEvent.model_validate(order) for order in orders]


class SqlMovementSource:

    def __init__(self, db: Session):
        self.db = db

    def list_recent_movements(
        self,
        limit: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[InventoryMovementEvent]:
        """The `limit` most recent movements, newest first."""
        query = select(InventoryMovement).options(
            selectinload(InventoryMovement.item)
        )
        start, end = _day_bounds(start_date, end_date)
        if start:
            query = query.where(InventoryMovement.movement_date >= start)
        if end:
            query = query.where(InventoryMovement.movement_date < end)

        query = query.order_by(
            InventoryMovement.movement_date.desc(), InventoryMovement.id.desc()
        ).limit(limit)

        return [
            InventoryMovementEvent(
                id=m.id,
                item_id=m.item_id,
                item_name=m.item.name if m.item else None,
                movement_type=m.movement_type,
                quantity=m.quantity,
                unit_cost=m.unit_cost,
                total_cost=m.total_cost,
                reference_type=m.reference_type,
                movement_date=m.movement_date,
                notes=m.notes,
            )
            for m in self.db.execute(query).scalars().all()
        ]
