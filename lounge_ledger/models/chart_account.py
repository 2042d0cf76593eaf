"""
Chart of accounts model.

Every place money can sit or come from (cash, inventory,
sales revenue, cost of goods sold, ...) is an account in the
chart. Journal lines are posted against account codes.
"""

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from lounge_ledger.models.base import Base
from lounge_ledger.models.enums import AccountType, enum_values


class ChartAccount(Base):
    """
    A single account in the chart of accounts.

    Once referenced by a journal line, an account is never
    deleted or re-coded, only deactivated via is_active=False.
    parent_code is an advisory grouping, not an enforced tree.
    """

    __tablename__ = "chart_of_accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(
            AccountType,
            name="account_type_enum",
            values_callable=enum_values,
        ),
        nullable=False,
    )
    parent_code: Mapped[str | None] = mapped_column(
        String(20), nullable=True, default=None
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<ChartAccount {self.code} {self.name} ({self.account_type.value})>"
