"""
Financial statement endpoints.

Reports never fail for lack of data; an empty period simply has
empty sections and zero totals.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lounge_ledger.models.base import get_db
from lounge_ledger.schemas.reports import (
    BalanceSheetReport,
    CashFlowReport,
    ProfitAndLossReport,
)
from lounge_ledger.services.report_service import ReportService

router = APIRouter(prefix="/accounting/reports", tags=["Reports"])


def _check_period(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise HTTPException(
            status_code=400, detail="end_date must not be before start_date"
        )


@router.get("/profit-loss", response_model=ProfitAndLossReport)
def profit_and_loss(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
):
    _check_period(start_date, end_date)
    return ReportService(db).profit_and_loss(start_date, end_date)


@router.get("/balance-sheet", response_model=BalanceSheetReport)
def balance_sheet(as_of_date: date, db: Session = Depends(get_db)):
    return ReportService(db).balance_sheet(as_of_date)


@router.get("/cash-flow", response_model=CashFlowReport)
def cash_flow(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
):
    _check_period(start_date, end_date)
    return ReportService(db).cash_flow(start_date, end_date)
