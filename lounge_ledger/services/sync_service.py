"""
Sync service: backfills the ledger from the POS.

The order and stock hooks post entries as events happen, but a
hook can fail or be skipped (the ledger was down, the POS was
offline, data was imported). This job walks completed orders and
recent stock movements and posts any that have no journal entry
yet. It is safe to run as often as you like: the reference
uniqueness makes a second run a no-op.
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from lounge_ledger.config import get_settings
from lounge_ledger.models.enums import MovementType, PostingStatus
from lounge_ledger.schemas.events import PostingResult
from lounge_ledger.schemas.reports import SyncResult, SyncSourceResult, SyncStatus
from lounge_ledger.services.chart_service import ChartOfAccountsService
from lounge_ledger.services.ledger_service import LedgerService
from lounge_ledger.services.posting_service import (
    PostingService,
    movement_reference,
)
from lounge_ledger.sources import (
    MovementSource,
    OrderSource,
    SqlMovementSource,
    SqlOrderSource,
)

logger = logging.getLogger(__name__)

POSTABLE_MOVEMENT_TYPES = (MovementType.IN, MovementType.OUT)


def _tally(counts: SyncSourceResult, result: PostingResult) -> None:
    if result.status == PostingStatus.POSTED:
        counts.synced += 1
    elif result.status == PostingStatus.FAILED:
        counts.failed += 1


class SyncService:

    def __init__(
        self,
        db: Session,
        order_source: OrderSource | None = None,
        movement_source: MovementSource | None = None,
    ):
        self.db = db
        self.order_source = order_source or SqlOrderSource(db)
        self.movement_source = movement_source or SqlMovementSource(db)
        self.ledger_service = LedgerService(db)
        self.posting_service = PostingService(db)
        self.movement_limit = get_settings().SYNC_MOVEMENT_LIMIT

    def sync_all_transactions(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        actor_id: int | None = None,
    ) -> SyncResult:
        """
        Post every completed order and recent stock movement that
        has no journal entry yet.

        Individual failures are counted and logged; they never stop
        the run. The caller commits.
        """
        ChartOfAccountsService(self.db).seed_defaults()

        sales = SyncSourceResult()
        orders = self.order_source.list_completed_orders(start_date, end_date)
        sales.total = len(orders)
        for order in orders:
            if self.ledger_service.find_by_reference(order.id):
                continue
            _tally(sales, self.posting_service.post_completed_order(order, actor_id))

        inventory = SyncSourceResult()
        movements = self.movement_source.list_recent_movements(
            self.movement_limit, start_date, end_date
        )
        inventory.total = len(movements)
        for movement in movements:
            if self.ledger_service.find_by_reference(movement_reference(movement.id)):
                continue
            _tally(
                inventory,
                self.posting_service.post_inventory_movement(movement, actor_id),
            )

        result = SyncResult(
            sales=sales,
            inventory=inventory,
            total_synced=sales.synced + inventory.synced,
            total_available=sales.total + inventory.total,
            failed=sales.failed + inventory.failed,
        )
        logger.info(
            "Ledger sync posted %d of %d events (%d failed)",
            result.total_synced, result.total_available, result.failed,
        )
        return result

    def get_sync_status(self) -> SyncStatus:
        """Count the postable events that still have no journal entry."""
        unsynced_orders = sum(
            1
            for order in self.order_source.list_completed_orders()
            if order.gross_total > 0
            and not self.ledger_service.find_by_reference(order.id)
        )
        unsynced_inventory = sum(
            1
            for movement in self.movement_source.list_recent_movements(
                self.movement_limit
            )
            if movement.movement_type in POSTABLE_MOVEMENT_TYPES
            and movement.cost > 0
            and not self.ledger_service.find_by_reference(
                movement_reference(movement.id)
            )
        )
        return SyncStatus(
            unsynced_orders=unsynced_orders,
            unsynced_inventory=unsynced_inventory,
            total_unsynced=unsynced_orders + unsynced_inventory,
        )
