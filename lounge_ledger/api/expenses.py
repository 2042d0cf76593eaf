"""
Expense endpoints.

A shortcut for the common "we paid a bill in cash" journal entry,
so staff do not have to build the two lines by hand.
"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lounge_ledger.api.journal import ledger_error_to_http
from lounge_ledger.exceptions import StorageFailure
from lounge_ledger.models.base import get_db
from lounge_ledger.schemas.ledger import (
    ExpenseCreate,
    JournalEntryFilter,
    JournalEntryResponse,
    JournalEntrySummary,
)
from lounge_ledger.services.audit_service import record_event
from lounge_ledger.services.ledger_service import LedgerService
from lounge_ledger.services.posting_service import EXPENSE_ENTRY_TYPE, PostingService

router = APIRouter(prefix="/accounting/expenses", tags=["Expenses"])


@router.get("", response_model=list[JournalEntrySummary])
def list_expenses(
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    return LedgerService(db).list_entries(JournalEntryFilter(
        entry_type=EXPENSE_ENTRY_TYPE,
        start_date=start_date,
        end_date=end_date,
    ))


@router.post("", response_model=JournalEntryResponse, status_code=201)
def create_expense(
    request: ExpenseCreate,
    db: Session = Depends(get_db),
):
    """Post Dr <expense account> / Cr Cash for the given amount."""
    try:
        entry = PostingService(db).record_expense(request)
        record_event(
            db, "EXPENSE_CREATE",
            {"entry_id": entry.id, "amount": request.amount,
             "account_code": request.account_code},
            actor_id=entry.created_by, reference=f"ENTRY-{entry.id}",
        )
        db.commit()
        return entry
    except (ValueError, LookupError, StorageFailure) as e:
        raise ledger_error_to_http(db, e)
