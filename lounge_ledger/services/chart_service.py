"""
Chart of accounts service.

Owns the set of accounts journal lines may be posted against,
and seeds the default restaurant chart the first time the
ledger is used.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from lounge_ledger.exceptions import DuplicateCode, StorageFailure
from lounge_ledger.models.chart_account import ChartAccount
from lounge_ledger.models.enums import AccountType
from lounge_ledger.schemas.ledger import ChartAccountCreate

logger = logging.getLogger(__name__)


# Well-known codes the automated posting rules rely on.
CASH = "1000"
INVENTORY = "1200"
ACCOUNTS_PAYABLE = "2000"
SALES_REVENUE = "4000"
COST_OF_GOODS_SOLD = "5000"
MISCELLANEOUS_EXPENSES = "5900"

DEFAULT_ACCOUNTS: list[tuple[str, str, AccountType]] = [
    # Assets
    ("1000", "Cash", AccountType.ASSET),
    ("1100", "Accounts Receivable", AccountType.ASSET),
    ("1200", "Inventory", AccountType.ASSET),
    ("1300", "Prepaid Expenses", AccountType.ASSET),
    ("1400", "Equipment", AccountType.ASSET),
    ("1500", "Accumulated Depreciation", AccountType.ASSET),
    # Liabilities
    ("2000", "Accounts Payable", AccountType.LIABILITY),
    ("2100", "Accrued Expenses", AccountType.LIABILITY),
    ("2200", "Loans Payable", AccountType.LIABILITY),
    ("2300", "Taxes Payable", AccountType.LIABILITY),
    # Equity
    ("3000", "Owner's Equity", AccountType.EQUITY),
    ("3100", "Retained Earnings", AccountType.EQUITY),
    ("3900", "Current Year Earnings", AccountType.EQUITY),
    # Revenue
    ("4000", "Sales Revenue", AccountType.REVENUE),
    ("4100", "Service Revenue", AccountType.REVENUE),
    ("4200", "Other Revenue", AccountType.REVENUE),
    # Expenses
    ("5000", "Cost of Goods Sold", AccountType.EXPENSE),
    ("5100", "Salaries & Wages", AccountType.EXPENSE),
    ("5200", "Rent Expense", AccountType.EXPENSE),
    ("5300", "Utilities", AccountType.EXPENSE),
    ("5400", "Supplies", AccountType.EXPENSE),
    ("5500", "Depreciation", AccountType.EXPENSE),
    ("5600", "Marketing & Advertising", AccountType.EXPENSE),
    ("5900", "Miscellaneous Expenses", AccountType.EXPENSE),
]


class ChartOfAccountsService:

    def __init__(self, db: Session):
        self.db = db

    def list_accounts(self, active_only: bool = True) -> list[ChartAccount]:
        """Return accounts ordered by code."""
        query = select(ChartAccount).order_by(ChartAccount.code)
        if active_only:
            query = query.where(ChartAccount.is_active.is_(True))
        return list(self.db.execute(query).scalars().all())

    def get_account(self, code: str) -> ChartAccount | None:
        return self.db.execute(
            select(ChartAccount).where(ChartAccount.code == code)
        ).scalar_one_or_none()

    def add_account(self, request: ChartAccountCreate) -> ChartAccount:
        """
        Create a new account.

        Raises DuplicateCode if the code already exists, whether we
        see it up front or the unique constraint catches a concurrent
        insert.
        """
        if self.get_account(request.code):
            raise DuplicateCode(
                f"Account with code '{request.code}' already exists"
            )

        account = ChartAccount(
            code=request.code,
            name=request.name,
            account_type=request.account_type,
            parent_code=request.parent_code,
        )
        try:
            with self.db.begin_nested():
                self.db.add(account)
        except IntegrityError as e:
            raise DuplicateCode(
                f"Account with code '{request.code}' already exists"
            ) from e
        except SQLAlchemyError as e:
            raise StorageFailure(f"Could not create account: {e}") from e
        return account

    def set_active(self, code: str, is_active: bool) -> ChartAccount | None:
        """Retire or reactivate an account. Accounts are never deleted."""
        account = self.get_account(code)
        if not account:
            return None
        account.is_active = is_active
        self.db.flush()
        return account

    def seed_defaults(self) -> int:
        """
        Insert the default chart if, and only if, the chart is empty.

        Returns the number of accounts inserted. Safe to call on
        every startup; a second seeder racing this one trips the
        unique code constraint and is treated as already seeded.
        """
        count = self.db.execute(
            select(func.count()).select_from(ChartAccount)
        ).scalar()
        if count:
            return 0

        try:
            with self.db.begin_nested():
                for code, name, account_type in DEFAULT_ACCOUNTS:
                    self.db.add(ChartAccount(
                        code=code,
                        name=name,
                        account_type=account_type,
                    ))
        except IntegrityError:
            logger.info("Chart of accounts seeded concurrently, skipping")
            return 0

        logger.info("Seeded %d default accounts", len(DEFAULT_ACCOUNTS))
        return len(DEFAULT_ACCOUNTS)
