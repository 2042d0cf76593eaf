"""
Ledger sync endpoints.

POST runs the backfill on demand (the "Sync data" button, or a
cron job owned by whoever deploys this). GET reports how much is
waiting to be synced.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lounge_ledger.models.base import get_db
from lounge_ledger.schemas.reports import SyncRequest, SyncResult, SyncStatus
from lounge_ledger.services.audit_service import record_event
from lounge_ledger.services.sync_service import SyncService

router = APIRouter(prefix="/accounting/sync", tags=["Sync"])


@router.post("", response_model=SyncResult)
def sync_transactions(
    request: SyncRequest | None = None,
    db: Session = Depends(get_db),
):
    request = request or SyncRequest()
    if request.start_date and request.end_date and request.end_date < request.start_date:
        raise HTTPException(
            status_code=400, detail="end_date must not be before start_date"
        )

    result = SyncService(db).sync_all_transactions(
        request.start_date, request.end_date, request.actor_id
    )
    record_event(
        db, "ACCOUNTING_SYNC",
        {
            "start_date": request.start_date,
            "end_date": request.end_date,
            "total_synced": result.total_synced,
            "total_available": result.total_available,
            "failed": result.failed,
        },
        actor_id=request.actor_id, reference="ACCOUNTING",
    )
    db.commit()
    return result


@router.get("", response_model=SyncStatus)
def sync_status(db: Session = Depends(get_db)):
    return SyncService(db).get_sync_status()
