"""
Report service: financial statements derived from the journal.

Nothing here is stored. Every figure is an aggregate over posted
(non-draft) journal lines, recomputed on each call, so a report
is always consistent with the ledger as it stands.

Names on report rows are the names the lines were posted under;
the chart of accounts is joined only to learn each account's type.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from lounge_ledger.config import get_settings
from lounge_ledger.models.chart_account import ChartAccount
from lounge_ledger.models.enums import AccountType, EntryStatus
from lounge_ledger.models.journal_entry import JournalEntry, JournalEntryLine
from lounge_ledger.schemas.reports import (
    AccountBalance,
    BalanceSheetReport,
    CashFlowItem,
    CashFlowReport,
    ProfitAndLossReport,
    ReportPeriod,
)
from lounge_ledger.services.chart_service import CASH

ZERO = Decimal("0")


def _decimal(value) -> Decimal:
    if value is None:
        return ZERO
    return Decimal(str(value))


class ReportService:

    def __init__(self, db: Session):
        self.db = db
        self.tolerance = get_settings().BALANCE_TOLERANCE

    def _account_balances(
        self,
        amount,
        account_types: tuple[AccountType, ...],
        start_date: date | None,
        end_date: date,
    ) -> list[AccountBalance]:
        """
        Sum `amount` per account over posted lines in the date range.

        Aggregates within the tolerance of zero are dropped.
        """
        query = (
            select(
                JournalEntryLine.account_code,
                JournalEntryLine.account_name,
                ChartAccount.account_type,
                func.sum(amount),
            )
            .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
            .join(ChartAccount, JournalEntryLine.account_code == ChartAccount.code)
            .where(
                JournalEntry.status != EntryStatus.DRAFT,
                JournalEntry.entry_date <= end_date,
                ChartAccount.account_type.in_(account_types),
            )
            .group_by(
                JournalEntryLine.account_code,
                JournalEntryLine.account_name,
                ChartAccount.account_type,
            )
            .order_by(JournalEntryLine.account_code)
        )
        if start_date is not None:
            query = query.where(JournalEntry.entry_date >= start_date)

        balances = []
        for code, name, account_type, total in self.db.execute(query).all():
            balance = _decimal(total)
            if abs(balance) <= self.tolerance:
                continue
            balances.append(AccountBalance(
                account_code=code,
                account_name=name,
                account_type=account_type,
                balance=balance,
            ))
        return balances

    def profit_and_loss(self, start_date: date, end_date: date) -> ProfitAndLossReport:
        """
        Revenue and expenses for a period, both shown as positive
        amounts, and the net income between them.
        """
        rows = self._account_balances(
            JournalEntryLine.credit - JournalEntryLine.debit,
            (AccountType.REVENUE, AccountType.EXPENSE),
            start_date,
            end_date,
        )

        revenue = [r for r in rows if r.account_type == AccountType.REVENUE]
        # Expenses carry a debit balance; flip them positive for display.
        expenses = [
            r.model_copy(update={"balance": abs(r.balance)})
            for r in rows if r.account_type == AccountType.EXPENSE
        ]

        total_revenue = sum((r.balance for r in revenue), ZERO)
        total_expenses = sum((e.balance for e in expenses), ZERO)

        return ProfitAndLossReport(
            period=ReportPeriod(start=start_date, end=end_date),
            revenue=revenue,
            expenses=expenses,
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_income=total_revenue - total_expenses,
        )

    def balance_sheet(self, as_of_date: date) -> BalanceSheetReport:
        """
        Asset, liability and equity balances at the end of as_of_date.

        Entries dated on as_of_date are included, later ones are not.
        """
        rows = self._account_balances(
            JournalEntryLine.debit - JournalEntryLine.credit,
            (AccountType.ASSET, AccountType.LIABILITY, AccountType.EQUITY),
            None,
            as_of_date,
        )

        assets = [r for r in rows if r.account_type == AccountType.ASSET]
        liabilities = [
            r.model_copy(update={"balance": abs(r.balance)})
            for r in rows if r.account_type == AccountType.LIABILITY
        ]
        equity = [
            r.model_copy(update={"balance": abs(r.balance)})
            for r in rows if r.account_type == AccountType.EQUITY
        ]

        return BalanceSheetReport(
            as_of_date=as_of_date,
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            total_assets=sum((a.balance for a in assets), ZERO),
            total_liabilities=sum((l.balance for l in liabilities), ZERO),
            total_equity=sum((e.balance for e in equity), ZERO),
        )

    def cash_flow(self, start_date: date, end_date: date) -> CashFlowReport:
        """
        Movements of the Cash account over a period.

        Every period line is classed as operating for now; investing
        and financing stay empty. Ending cash is beginning cash plus
        the net flow, so the statement always rolls forward.
        """
        cash_change = JournalEntryLine.debit - JournalEntryLine.credit
        posted_cash = (
            JournalEntry.status != EntryStatus.DRAFT,
            JournalEntryLine.account_code == CASH,
        )

        period_rows = self.db.execute(
            select(JournalEntryLine.description, func.sum(cash_change))
            .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
            .where(
                *posted_cash,
                JournalEntry.entry_date >= start_date,
                JournalEntry.entry_date <= end_date,
            )
            .group_by(JournalEntryLine.description)
            .order_by(func.min(JournalEntry.entry_date), JournalEntryLine.description)
        ).all()

        operating = [
            CashFlowItem(
                description=description or "Cash transaction",
                amount=_decimal(amount),
            )
            for description, amount in period_rows
        ]

        beginning_cash = _decimal(self.db.execute(
            select(func.sum(cash_change))
            .select_from(JournalEntryLine)
            .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
            .where(*posted_cash, JournalEntry.entry_date < start_date)
        ).scalar())

        net_cash_flow = sum((item.amount for item in operating), ZERO)

        return CashFlowReport(
            period=ReportPeriod(start=start_date, end=end_date),
            operating=operating,
            investing=[],
            financing=[],
            net_cash_flow=net_cash_flow,
            beginning_cash=beginning_cash,
            ending_cash=beginning_cash + net_cash_flow,
        )
