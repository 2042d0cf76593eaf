"""
Pydantic schemas for chart of accounts and journal operations.

These define the API contract: what data comes in, what data
goes out. They are separate from the database models because
the API shape and the storage shape are often different.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from lounge_ledger.models.enums import AccountType, EntryStatus


def _blank_to_none(v: str | None) -> str | None:
    # The POS sends "" for "no reference"; NULL keeps the unique index happy.
    if v is None:
        return None
    v = v.strip()
    return v or None


# --- Chart of Accounts ---

class ChartAccountCreate(BaseModel):
    """Request to create a new chart of accounts entry."""
    code: str = Field(min_length=1, max_length=20)
    name: str = Field(min_length=1, max_length=100)
    account_type: AccountType
    parent_code: str | None = Field(default=None, max_length=20)


class ChartAccountUpdate(BaseModel):
    is_active: bool


class ChartAccountResponse(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType
    parent_code: str | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


# --- Journal Entries ---

class JournalLineCreate(BaseModel):
    """
    A single line of a journal entry.

    account_name may be left out; the ledger fills it in from
    the chart of accounts at posting time.
    """
    account_code: str = Field(min_length=1, max_length=20)
    account_name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=255)
    debit: Decimal = Field(default=Decimal("0"), ge=0)
    credit: Decimal = Field(default=Decimal("0"), ge=0)


class JournalEntryCreate(BaseModel):
    """
    A complete journal entry: header plus lines that must balance.

    Emptiness and balance are checked by LedgerService rather than
    here, so every caller (API or automated posting) gets the same
    error types.
    """
    entry_date: date
    entry_type: str = Field(default="journal", min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=255)
    reference: str | None = Field(default=None, max_length=100)
    status: EntryStatus = EntryStatus.POSTED
    created_by: int | None = None
    lines: list[JournalLineCreate]

    @field_validator("reference")
    @classmethod
    def normalize_reference(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class JournalEntryUpdate(BaseModel):
    """Header-only changes. Lines are never edited after posting."""
    entry_date: date | None = None
    description: str | None = Field(default=None, max_length=255)
    reference: str | None = Field(default=None, max_length=100)
    status: EntryStatus | None = None

    @field_validator("reference")
    @classmethod
    def normalize_reference(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class JournalEntryFilter(BaseModel):
    """Optional filters for listing entries. Date bounds are inclusive."""
    entry_type: str | None = None
    status: EntryStatus | None = None
    reference: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class JournalLineResponse(BaseModel):
    id: int
    account_code: str
    account_name: str
    description: str | None
    debit: Decimal
    credit: Decimal

    model_config = {"from_attributes": True}


class JournalEntrySummary(BaseModel):
    """Entry header as shown in listings."""
    id: int
    entry_date: date
    entry_type: str
    description: str | None
    reference: str | None
    total_amount: Decimal
    status: EntryStatus
    created_by: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JournalEntryResponse(JournalEntrySummary):
    lines: list[JournalLineResponse]


# --- Expenses ---

class ExpenseCreate(BaseModel):
    """A cash-paid expense, posted as Dr <expense account> / Cr Cash."""
    entry_date: date
    description: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(gt=0, decimal_places=4)
    account_code: str = Field(min_length=1, max_length=20)
    reference: str | None = Field(default=None, max_length=100)
    created_by: int | None = None

    @field_validator("reference")
    @classmethod
    def normalize_reference(cls, v: str | None) -> str | None:
        return _blank_to_none(v)
