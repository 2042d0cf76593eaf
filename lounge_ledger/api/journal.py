"""
Journal entry endpoints.

The API layer is thin: it handles HTTP concerns (status codes,
response formatting, commit/rollback) and delegates all
accounting rules to the LedgerService.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lounge_ledger.exceptions import DuplicateReference, NotFound, StorageFailure
from lounge_ledger.models.base import get_db
from lounge_ledger.models.enums import EntryStatus
from lounge_ledger.services.audit_service import record_event
from lounge_ledger.services.ledger_service import LedgerService
from lounge_ledger.schemas.ledger import (
    JournalEntryCreate,
    JournalEntryFilter,
    JournalEntryResponse,
    JournalEntrySummary,
    JournalEntryUpdate,
)

router = APIRouter(prefix="/accounting/journal-entries", tags=["Journal"])


def ledger_error_to_http(db: Session, e: Exception) -> HTTPException:
    """Roll back the request's work and pick the status code for a ledger error."""
    db.rollback()
    if isinstance(e, DuplicateReference):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, StorageFailure):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[JournalEntrySummary])
def list_entries(
    entry_type: str | None = None,
    status: EntryStatus | None = None,
    reference: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    """List entries, newest first."""
    return LedgerService(db).list_entries(JournalEntryFilter(
        entry_type=entry_type,
        status=status,
        reference=reference,
        start_date=start_date,
        end_date=end_date,
    ))


@router.post("", response_model=JournalEntryResponse, status_code=201)
def create_entry(
    request: JournalEntryCreate,
    db: Session = Depends(get_db),
):
    """
    Post a journal entry.

    Total debits must equal total credits (within a cent) and every
    line must name an active account. A reference can only be used
    once; reusing it returns 409.
    """
    service = LedgerService(db)
    try:
        entry = service.create_entry(request)
        record_event(
            db, "JOURNAL_ENTRY_CREATE",
            {"entry_id": entry.id, "total_amount": entry.total_amount,
             "entry_type": entry.entry_type},
            actor_id=entry.created_by, reference=entry.reference,
        )
        db.commit()
        return entry
    except (ValueError, LookupError, StorageFailure) as e:
        raise ledger_error_to_http(db, e)


@router.get("/{entry_id}", response_model=JournalEntryResponse)
def get_entry(entry_id: int, db: Session = Depends(get_db)):
    entry = LedgerService(db).get_entry(entry_id)
    if not entry:
        raise HTTPException(
            status_code=404, detail=f"Journal entry {entry_id} not found"
        )
    return entry


@router.patch("/{entry_id}", response_model=JournalEntrySummary)
def update_entry(
    entry_id: int,
    request: JournalEntryUpdate,
    actor_id: int | None = None,
    db: Session = Depends(get_db),
):
    """Change the date, description, reference or status of an entry."""
    service = LedgerService(db)
    try:
        entry = service.update_entry(entry_id, request)
    except (ValueError, StorageFailure) as e:
        raise ledger_error_to_http(db, e)

    if not entry:
        raise HTTPException(
            status_code=404, detail=f"Journal entry {entry_id} not found"
        )
    record_event(
        db, "JOURNAL_ENTRY_UPDATE",
        {"entry_id": entry_id, **request.model_dump(exclude_unset=True)},
        actor_id=actor_id, reference=entry.reference,
    )
    db.commit()
    return entry


@router.delete("/{entry_id}", status_code=204)
def delete_entry(
    entry_id: int,
    actor_id: int | None = None,
    db: Session = Depends(get_db),
):
    service = LedgerService(db)
    try:
        removed = service.delete_entry(entry_id)
    except StorageFailure as e:
        raise ledger_error_to_http(db, e)

    if not removed:
        raise HTTPException(
            status_code=404, detail=f"Journal entry {entry_id} not found"
        )
    record_event(
        db, "JOURNAL_ENTRY_DELETE", {"entry_id": entry_id}, actor_id=actor_id,
    )
    db.commit()
