"""
Tests for the ReportService financial statements.

Tests cover:
- Profit and loss over a period
- Balance sheet as-of semantics
- Cash flow grouping and roll-forward
- Drafts never reach a report
- Empty ledgers produce empty reports
"""

from datetime import date
from decimal import Decimal

from lounge_ledger.models.enums import EntryStatus
from lounge_ledger.schemas.ledger import JournalEntryCreate, JournalLineCreate
from lounge_ledger.services.ledger_service import LedgerService
from lounge_ledger.services.report_service import ReportService


def post(db, entry_date, debit_code, credit_code, amount, description=None, **kwargs):
    """Post a two-line entry. `description` goes on both lines."""
    amount = Decimal(amount)
    return LedgerService(db).create_entry(JournalEntryCreate(
        entry_date=entry_date,
        lines=[
            JournalLineCreate(account_code=debit_code, debit=amount, description=description),
            JournalLineCreate(account_code=credit_code, credit=amount, description=description),
        ],
        **kwargs,
    ))


def january_books(db):
    """A month's cash sale and the cost of what was sold."""
    post(db, date(2024, 1, 5), "1000", "4000", "10000", "Sales")
    post(db, date(2024, 1, 10), "5000", "1200", "3000", "Cost of sales")
    db.commit()


def balances(rows):
    return {row.account_code: row.balance for row in rows}


class TestProfitAndLoss:

    def test_revenue_less_expenses(self, seeded_session):
        january_books(seeded_session)
        report = ReportService(seeded_session).profit_and_loss(
            date(2024, 1, 1), date(2024, 1, 31)
        )

        assert report.total_revenue == Decimal("10000")
        assert report.total_expenses == Decimal("3000")
        assert report.net_income == Decimal("7000")
        assert balances(report.revenue) == {"4000": Decimal("10000")}
        assert balances(report.expenses) == {"5000": Decimal("3000")}
        assert report.period.start == date(2024, 1, 1)
        assert report.period.end == date(2024, 1, 31)

    def test_only_entries_in_period(self, seeded_session):
        january_books(seeded_session)
        post(seeded_session, date(2024, 2, 1), "1000", "4000", "500")

        report = ReportService(seeded_session).profit_and_loss(
            date(2024, 1, 6), date(2024, 1, 31)
        )

        assert report.total_revenue == Decimal("0")
        assert report.revenue == []
        assert report.total_expenses == Decimal("3000")
        assert report.net_income == Decimal("-3000")

    def test_revenue_rows_use_posted_names(self, seeded_session):
        post(seeded_session, date(2024, 1, 5), "1000", "4100", "250")
        report = ReportService(seeded_session).profit_and_loss(
            date(2024, 1, 1), date(2024, 1, 31)
        )

        (row,) = report.revenue
        assert row.account_name == "Service Revenue"

    def test_accounts_that_net_to_zero_are_omitted(self, seeded_session):
        post(seeded_session, date(2024, 1, 5), "1000", "4000", "80")
        # Refund reverses the sale.
        post(seeded_session, date(2024, 1, 6), "4000", "1000", "80")

        report = ReportService(seeded_session).profit_and_loss(
            date(2024, 1, 1), date(2024, 1, 31)
        )
        assert report.revenue == []
        assert report.total_revenue == Decimal("0")

    def test_drafts_are_excluded(self, seeded_session):
        january_books(seeded_session)
        post(
            seeded_session, date(2024, 1, 20), "1000", "4000", "999",
            status=EntryStatus.DRAFT,
        )

        report = ReportService(seeded_session).profit_and_loss(
            date(2024, 1, 1), date(2024, 1, 31)
        )
        assert report.total_revenue == Decimal("10000")

    def test_empty_ledger(self, db_session):
        report = ReportService(db_session).profit_and_loss(
            date(2024, 1, 1), date(2024, 1, 31)
        )

        assert report.revenue == []
        assert report.expenses == []
        assert report.net_income == Decimal("0")


class TestBalanceSheet:

    def test_balances_as_of_date(self, seeded_session):
        january_books(seeded_session)
        post(seeded_session, date(2024, 1, 2), "1200", "2000", "4000", "Stock on credit")
        post(seeded_session, date(2024, 1, 1), "1000", "3000", "20000", "Owner funding")

        report = ReportService(seeded_session).balance_sheet(date(2024, 1, 31))

        assert balances(report.assets) == {
            "1000": Decimal("30000"),
            "1200": Decimal("1000"),
        }
        assert balances(report.liabilities) == {"2000": Decimal("4000")}
        assert balances(report.equity) == {"3000": Decimal("20000")}
        assert report.total_assets == Decimal("31000")
        assert report.total_liabilities == Decimal("4000")
        assert report.total_equity == Decimal("20000")

    def test_entry_on_as_of_date_is_included(self, seeded_session):
        january_books(seeded_session)
        report = ReportService(seeded_session).balance_sheet(date(2024, 1, 10))

        assert balances(report.assets) == {
            "1000": Decimal("10000"),
            "1200": Decimal("-3000"),
        }

    def test_later_entries_are_excluded(self, seeded_session):
        january_books(seeded_session)
        report = ReportService(seeded_session).balance_sheet(date(2024, 1, 9))

        assert balances(report.assets) == {"1000": Decimal("10000")}

    def test_income_accounts_are_not_listed(self, seeded_session):
        january_books(seeded_session)
        report = ReportService(seeded_session).balance_sheet(date(2024, 12, 31))

        listed = balances(report.assets + report.liabilities + report.equity)
        assert "4000" not in listed
        assert "5000" not in listed

    def test_empty_ledger(self, db_session):
        report = ReportService(db_session).balance_sheet(date(2024, 1, 31))

        assert report.assets == []
        assert report.total_assets == Decimal("0")
        assert report.total_liabilities == Decimal("0")
        assert report.total_equity == Decimal("0")


class TestCashFlow:

    def test_period_movements_and_roll_forward(self, seeded_session):
        post(seeded_session, date(2023, 12, 31), "1000", "3000", "5000", "Owner funding")
        post(seeded_session, date(2024, 1, 5), "1000", "4000", "300", "POS Sale Receipt")
        post(seeded_session, date(2024, 1, 6), "1000", "4000", "200", "POS Sale Receipt")
        post(seeded_session, date(2024, 1, 8), "5200", "1000", "1200", "Payment for Expense")
        seeded_session.commit()

        report = ReportService(seeded_session).cash_flow(date(2024, 1, 1), date(2024, 1, 31))

        flows = {item.description: item.amount for item in report.operating}
        assert flows == {
            "POS Sale Receipt": Decimal("500"),
            "Payment for Expense": Decimal("-1200"),
        }
        assert [item.description for item in report.operating] == [
            "POS Sale Receipt", "Payment for Expense",
        ]
        assert report.investing == []
        assert report.financing == []
        assert report.net_cash_flow == Decimal("-700")
        assert report.beginning_cash == Decimal("5000")
        assert report.ending_cash == Decimal("4300")

    def test_lines_without_description(self, seeded_session):
        post(seeded_session, date(2024, 1, 5), "1000", "4200", "40")

        report = ReportService(seeded_session).cash_flow(date(2024, 1, 1), date(2024, 1, 31))
        assert [item.description for item in report.operating] == ["Cash transaction"]

    def test_non_cash_entries_ignored(self, seeded_session):
        post(seeded_session, date(2024, 1, 10), "5000", "1200", "3000", "Cost of sales")

        report = ReportService(seeded_session).cash_flow(date(2024, 1, 1), date(2024, 1, 31))
        assert report.operating == []
        assert report.net_cash_flow == Decimal("0")

    def test_empty_ledger(self, db_session):
        report = ReportService(db_session).cash_flow(date(2024, 1, 1), date(2024, 1, 31))

        assert report.operating == []
        assert report.beginning_cash == Decimal("0")
        assert report.ending_cash == Decimal("0")
