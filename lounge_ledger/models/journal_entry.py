"""
Journal entry and journal entry line models.

A journal entry is one balanced accounting event: a header
(date, type, description, reference) plus two or more lines,
each debiting or crediting one account. Lines belong to their
entry and have no life outside it.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Numeric, Integer, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lounge_ledger.models.base import Base
from lounge_ledger.models.enums import EntryStatus, enum_values


class JournalEntry(Base):
    """
    Header of a journal entry.

    reference correlates the entry with the business event that
    produced it (an order id, or "MOV-<movement id>"). It is unique
    so the same event can never be posted twice, even by two sync
    runs racing each other. Entries without a reference store NULL,
    which the constraint ignores.

    Debits equal credits across the lines. That invariant is
    enforced by LedgerService before anything is written.
    """

    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    entry_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default="journal"
    )
    description: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    reference: Mapped[str | None] = mapped_column(
        String(100), unique=True, nullable=True
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    status: Mapped[EntryStatus] = mapped_column(
        SAEnum(
            EntryStatus,
            name="entry_status_enum",
            values_callable=enum_values,
        ),
        nullable=False,
        default=EntryStatus.POSTED,
    )
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    lines: Mapped[list["JournalEntryLine"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalEntryLine.id",
    )

    def __repr__(self) -> str:
        return (
            f"<JournalEntry {self.id} {self.entry_date} "
            f"{self.entry_type} {self.total_amount} ({self.status.value})>"
        )


class JournalEntryLine(Base):
    """
    One debit and/or credit against a single account.

    account_name is copied from the chart at posting time so that
    reports keep showing the name the line was posted under, even
    if the account is renamed later.
    """

    __tablename__ = "journal_entry_lines"

    id: Mapped[int] = mapped_column(primary_key=True)
    journal_entry_id: Mapped[int] = mapped_column(
        ForeignKey("journal_entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    account_code: Mapped[str] = mapped_column(
        ForeignKey("chart_of_accounts.code"), nullable=False, index=True
    )
    account_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    debit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    credit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    entry: Mapped["JournalEntry"] = relationship(back_populates="lines")

    def __repr__(self) -> str:
        return (
            f"<JournalEntryLine {self.account_code} "
            f"Dr {self.debit} Cr {self.credit}>"
        )
