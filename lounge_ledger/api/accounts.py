"""
Chart of accounts endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lounge_ledger.exceptions import StorageFailure
from lounge_ledger.models.base import get_db
from lounge_ledger.schemas.ledger import (
    ChartAccountCreate,
    ChartAccountResponse,
    ChartAccountUpdate,
)
from lounge_ledger.services.audit_service import record_event
from lounge_ledger.services.chart_service import ChartOfAccountsService

router = APIRouter(prefix="/accounting/chart-of-accounts", tags=["Chart of Accounts"])


@router.get("", response_model=list[ChartAccountResponse])
def list_accounts(
    active_only: bool = True,
    db: Session = Depends(get_db),
):
    """List accounts ordered by code. Inactive ones only on request."""
    return ChartOfAccountsService(db).list_accounts(active_only=active_only)


@router.get("/{code}", response_model=ChartAccountResponse)
def get_account(code: str, db: Session = Depends(get_db)):
    account = ChartOfAccountsService(db).get_account(code)
    if not account:
        raise HTTPException(status_code=404, detail=f"Account {code} not found")
    return account


@router.post("", response_model=ChartAccountResponse, status_code=201)
def create_account(
    request: ChartAccountCreate,
    actor_id: int | None = None,
    db: Session = Depends(get_db),
):
    """Add an account to the chart. Codes are unique and permanent."""
    service = ChartOfAccountsService(db)
    try:
        account = service.add_account(request)
        record_event(
            db, "ACCOUNT_CREATE",
            {"code": account.code, "name": account.name,
             "account_type": account.account_type.value},
            actor_id=actor_id, reference=account.code,
        )
        db.commit()
        return account
    except StorageFailure as e:
        db.rollback()
        raise HTTPException(status_code=503, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{code}", response_model=ChartAccountResponse)
def update_account(
    code: str,
    request: ChartAccountUpdate,
    db: Session = Depends(get_db),
):
    """Retire or reactivate an account. Accounts are never deleted."""
    account = ChartOfAccountsService(db).set_active(code, request.is_active)
    if not account:
        raise HTTPException(status_code=404, detail=f"Account {code} not found")
    db.commit()
    return account
