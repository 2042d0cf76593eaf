"""
Business event hooks.

The POS calls these right after an order is completed or a stock
movement is recorded. They always answer 200: a bookkeeping
problem is reported in the body and logged, never turned into an
error the POS has to handle. Anything missed is picked up later by
/accounting/sync.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lounge_ledger.models.base import get_db
from lounge_ledger.schemas.events import (
    InventoryMovementEvent,
    OrderEvent,
    PostingResult,
)
from lounge_ledger.services.posting_service import PostingService

router = APIRouter(prefix="/accounting/events", tags=["Events"])


@router.post("/orders", response_model=PostingResult)
def order_completed(
    order: OrderEvent,
    actor_id: int | None = None,
    db: Session = Depends(get_db),
):
    result = PostingService(db).post_completed_order(order, actor_id)
    db.commit()
    return result


@router.post("/inventory-movements", response_model=PostingResult)
def inventory_moved(
    movement: InventoryMovementEvent,
    actor_id: int | None = None,
    db: Session = Depends(get_db),
):
    result = PostingService(db).post_inventory_movement(movement, actor_id)
    db.commit()
    return result
