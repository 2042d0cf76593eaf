"""
Pydantic schemas for financial statements and sync results.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from lounge_ledger.models.enums import AccountType


class AccountBalance(BaseModel):
    account_code: str
    account_name: str
    account_type: AccountType
    balance: Decimal


class ReportPeriod(BaseModel):
    start: date
    end: date


class ProfitAndLossReport(BaseModel):
    period: ReportPeriod
    revenue: list[AccountBalance]
    expenses: list[AccountBalance]
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal


class BalanceSheetReport(BaseModel):
    """
    Asset, liability and equity balances as of a date.

    Assets = Liabilities + Equity is not forced; it only holds when
    every entry balanced and income has been closed to equity.
    """
    as_of_date: date
    assets: list[AccountBalance]
    liabilities: list[AccountBalance]
    equity: list[AccountBalance]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal


class CashFlowItem(BaseModel):
    description: str
    amount: Decimal


class CashFlowReport(BaseModel):
    period: ReportPeriod
    operating: list[CashFlowItem]
    investing: list[CashFlowItem] = Field(default_factory=list)
    financing: list[CashFlowItem] = Field(default_factory=list)
    net_cash_flow: Decimal
    beginning_cash: Decimal
    ending_cash: Decimal


# --- Sync ---

class SyncRequest(BaseModel):
    start_date: date | None = None
    end_date: date | None = None
    actor_id: int | None = None


class SyncSourceResult(BaseModel):
    synced: int = 0
    total: int = 0
    failed: int = 0


class SyncResult(BaseModel):
    sales: SyncSourceResult
    inventory: SyncSourceResult
    total_synced: int
    total_available: int
    failed: int


class SyncStatus(BaseModel):
    unsynced_orders: int
    unsynced_inventory: int
    total_unsynced: int
