"""
Posting service: turns business events into journal entries.

Each operation:
1. Decides whether the event produces an entry at all
2. Checks the event's reference has not been posted already
3. Builds a balanced two-line entry from the posting rule
4. Posts it through LedgerService

Bookkeeping is a side effect of selling and stocking, never a
precondition. post_completed_order and post_inventory_movement
therefore never raise: every failure is logged and reported back
as a FAILED PostingResult, and the caller's own work in the
session is left alone.
"""

import logging
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from lounge_ledger.config import get_settings
from lounge_ledger.exceptions import DuplicateReference
from lounge_ledger.models.enums import (
    LOSS_REFERENCE_TYPES,
    MovementReferenceType,
    MovementType,
    OrderStatus,
    PostingStatus,
)
from lounge_ledger.models.journal_entry import JournalEntry
from lounge_ledger.schemas.events import (
    InventoryMovementEvent,
    OrderEvent,
    PostingResult,
)
from lounge_ledger.schemas.ledger import (
    ExpenseCreate,
    JournalEntryCreate,
    JournalLineCreate,
)
from lounge_ledger.services import chart_service as accounts
from lounge_ledger.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


SALES_ENTRY_TYPE = "sales_receipt"
INVENTORY_ENTRY_TYPE = "inventory"
EXPENSE_ENTRY_TYPE = "expense"

WASTE_ACCOUNT_NAME = "Miscellaneous Expenses (Waste/Loss)"


def movement_reference(movement_id: int) -> str:
    """Correlation key linking a stock movement to its journal entry."""
    return f"MOV-{movement_id}"


def _as_date(value: datetime | None) -> date:
    return value.date() if value else date.today()


class PostingService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger_service = LedgerService(db)

    def post_completed_order(
        self, order: OrderEvent, actor_id: int | None = None
    ) -> PostingResult:
        """
        Record the cash taken for a completed order.

        Accounting:
            DEBIT  Cash (asset increases, the till has the money)
            CREDIT Sales Revenue (revenue increases)

        Posted gross: tax and discount are not split out.
        """
        reference = order.id
        total = order.gross_total

        if order.status != OrderStatus.COMPLETED or total <= 0:
            logger.debug(
                "Order %s not postable (status=%s, total=%s)",
                order.id, order.status, total,
            )
            return PostingResult(status=PostingStatus.SKIPPED, reference=reference)

        request = JournalEntryCreate(
            entry_date=_as_date(order.timestamp),
            entry_type=SALES_ENTRY_TYPE,
            description=f"Sales Revenue - Order #{order.id[:8]}",
            reference=reference,
            created_by=actor_id,
            lines=[
                JournalLineCreate(
                    account_code=accounts.CASH,
                    account_name="Cash",
                    description="POS Sale Receipt",
                    debit=total,
                ),
                JournalLineCreate(
                    account_code=accounts.SALES_REVENUE,
                    account_name="Sales Revenue",
                    description="POS Sale",
                    credit=total,
                ),
            ],
        )
        return self._post_safely(request)

    def post_inventory_movement(
        self, movement: InventoryMovementEvent, actor_id: int | None = None
    ) -> PostingResult:
        """
        Record the cost side of a stock movement.

        Accounting for IN (stock received):
            DEBIT  Inventory
            CREDIT Accounts Payable (bought on a purchase order)
                   or Cash (paid on the spot)

        Accounting for OUT (stock consumed):
            DEBIT  Cost of Goods Sold
                   or Miscellaneous Expenses (waste, damage, theft)
            CREDIT Inventory

        Adjustments and transfers carry no ledger effect.
        """
        reference = movement_reference(movement.id)
        cost = movement.cost

        if cost <= 0:
            logger.debug("Movement %s has no cost, nothing to post", movement.id)
            return PostingResult(status=PostingStatus.SKIPPED, reference=reference)

        item = movement.item_name or f"item #{movement.item_id}"

        if movement.movement_type == MovementType.IN:
            if movement.reference_type == MovementReferenceType.PURCHASE_ORDER:
                credit_code, credit_name = accounts.ACCOUNTS_PAYABLE, "Accounts Payable"
            else:
                credit_code, credit_name = accounts.CASH, "Cash"
            lines = [
                JournalLineCreate(
                    account_code=accounts.INVENTORY,
                    account_name="Inventory",
                    description=f"Purchase: {item}",
                    debit=cost,
                ),
                JournalLineCreate(
                    account_code=credit_code,
                    account_name=credit_name,
                    description="Payment for inventory",
                    credit=cost,
                ),
            ]
            description = f"Inventory Purchase - {item}"
        elif movement.movement_type == MovementType.OUT:
            if movement.reference_type in LOSS_REFERENCE_TYPES:
                debit_code, debit_name = accounts.MISCELLANEOUS_EXPENSES, WASTE_ACCOUNT_NAME
                description = f"Inventory Loss ({movement.reference_type.value}) - {item}"
            else:
                debit_code, debit_name = accounts.COST_OF_GOODS_SOLD, "Cost of Goods Sold"
                description = f"Inventory Usage - {item}"
            lines = [
                JournalLineCreate(
                    account_code=debit_code,
                    account_name=debit_name,
                    description=f"Usage: {item}",
                    debit=cost,
                ),
                JournalLineCreate(
                    account_code=accounts.INVENTORY,
                    account_name="Inventory",
                    description="Inventory reduction",
                    credit=cost,
                ),
            ]
        else:
            logger.debug(
                "Movement %s of type %s has no posting rule",
                movement.id, movement.movement_type.value,
            )
            return PostingResult(status=PostingStatus.SKIPPED, reference=reference)

        if movement.notes:
            description = f"{description} - {movement.notes}"

        request = JournalEntryCreate(
            entry_date=_as_date(movement.movement_date),
            entry_type=INVENTORY_ENTRY_TYPE,
            description=description[:255],
            reference=reference,
            created_by=actor_id,
            lines=lines,
        )
        return self._post_safely(request)

    def _post_safely(self, request: JournalEntryCreate) -> PostingResult:
        """Post an automated entry, turning every failure into a result."""
        if request.created_by is None:
            request.created_by = get_settings().SYSTEM_ACTOR_ID

        try:
            existing = self.ledger_service.find_by_reference(request.reference)
            if existing:
                logger.debug("Reference %s already posted as entry %s",
                             request.reference, existing.id)
                return PostingResult(
                    status=PostingStatus.DUPLICATE,
                    reference=request.reference,
                    entry_id=existing.id,
                )
            entry = self.ledger_service.create_entry(request)
        except DuplicateReference:
            # Lost a race with another poster; the event is on the books.
            logger.info("Reference %s posted concurrently, skipping",
                        request.reference)
            return PostingResult(
                status=PostingStatus.DUPLICATE, reference=request.reference
            )
        except Exception as e:
            logger.exception(
                "Failed to post journal entry for %s", request.reference
            )
            return PostingResult(
                status=PostingStatus.FAILED,
                reference=request.reference,
                detail=str(e),
            )

        return PostingResult(
            status=PostingStatus.POSTED,
            reference=request.reference,
            entry_id=entry.id,
        )

    def record_expense(self, request: ExpenseCreate) -> JournalEntry:
        """
        Post a cash-paid expense.

        Accounting:
            DEBIT  <expense account>
            CREDIT Cash

        Unlike the automated postings this is an explicit user
        action, so ledger errors propagate to the caller.
        """
        return self.ledger_service.create_entry(JournalEntryCreate(
            entry_date=request.entry_date,
            entry_type=EXPENSE_ENTRY_TYPE,
            description=request.description,
            reference=request.reference,
            created_by=request.created_by,
            lines=[
                JournalLineCreate(
                    account_code=request.account_code,
                    description=request.description,
                    debit=request.amount,
                ),
                JournalLineCreate(
                    account_code=accounts.CASH,
                    description="Payment for Expense",
                    credit=request.amount,
                ),
            ],
        ))
