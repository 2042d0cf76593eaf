"""
Ledger service: the general journal.

This service enforces the fundamental rules:
1. Every entry must balance (debits = credits, within tolerance)
2. An entry and its lines are written together or not at all
3. Lines may only reference accounts that exist and are active
4. A reference (the originating business event) is posted once

No other service writes journal entries directly.
All postings, manual or automated, go through this service.
"""

import logging
from decimal import Decimal

from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from lounge_ledger.config import get_settings
from lounge_ledger.exceptions import (
    DuplicateReference,
    InvalidEntry,
    NotFound,
    StorageFailure,
    UnbalancedEntry,
)
from lounge_ledger.models.chart_account import ChartAccount
from lounge_ledger.models.enums import EntryStatus
from lounge_ledger.models.journal_entry import JournalEntry, JournalEntryLine
from lounge_ledger.schemas.ledger import (
    JournalEntryCreate,
    JournalEntryFilter,
    JournalEntryUpdate,
)

logger = logging.getLogger(__name__)


class LedgerService:
    """
    All journal operations pass through this service.

    The service takes a database session as a constructor
    argument, so the caller controls the outer transaction and
    decides when to commit. Each write runs in its own SAVEPOINT:
    a rejected entry leaves no trace and does not disturb whatever
    else the caller has pending in the session.
    """

    def __init__(self, db: Session):
        self.db = db
        self.tolerance = get_settings().BALANCE_TOLERANCE

    def create_entry(self, request: JournalEntryCreate) -> JournalEntry:
        """
        Post a journal entry with its lines.

        Raises:
            InvalidEntry: no lines, or a line names an inactive account
            UnbalancedEntry: debits and credits differ by more than
                the tolerance
            NotFound: a line names an account missing from the chart
            DuplicateReference: the reference was already posted
            StorageFailure: the database failed the write
        """
        if not request.lines:
            raise InvalidEntry("Journal entry must have at least one line")

        total_debits = sum((line.debit for line in request.lines), Decimal("0"))
        total_credits = sum((line.credit for line in request.lines), Decimal("0"))

        if abs(total_debits - total_credits) > self.tolerance:
            raise UnbalancedEntry(
                f"Journal entry does not balance: "
                f"debits={total_debits}, credits={total_credits}"
            )

        accounts = self._load_accounts({line.account_code for line in request.lines})

        if request.reference and self.find_by_reference(request.reference):
            raise DuplicateReference(
                f"Reference '{request.reference}' has already been posted"
            )

        entry = JournalEntry(
            entry_date=request.entry_date,
            entry_type=request.entry_type,
            description=request.description,
            reference=request.reference,
            total_amount=total_debits,
            status=request.status,
            created_by=(
                request.created_by
                if request.created_by is not None
                else get_settings().SYSTEM_ACTOR_ID
            ),
        )
        for line in request.lines:
            entry.lines.append(JournalEntryLine(
                account_code=line.account_code,
                account_name=line.account_name or accounts[line.account_code].name,
                description=line.description,
                debit=line.debit,
                credit=line.credit,
            ))

        try:
            with self.db.begin_nested():
                self.db.add(entry)
        except IntegrityError as e:
            if request.reference:
                raise DuplicateReference(
                    f"Reference '{request.reference}' has already been posted"
                ) from e
            raise StorageFailure(f"Could not post journal entry: {e}") from e
        except SQLAlchemyError as e:
            raise StorageFailure(f"Could not post journal entry: {e}") from e

        logger.debug(
            "Posted journal entry %s (%s, ref=%s, amount=%s)",
            entry.id, entry.entry_type, entry.reference, entry.total_amount,
        )
        return entry

    def _load_accounts(self, codes: set[str]) -> dict[str, ChartAccount]:
        """Fetch the accounts named by a set of lines, checking each is usable."""
        accounts = self.db.execute(
            select(ChartAccount).where(ChartAccount.code.in_(codes))
        ).scalars().all()
        accounts_by_code = {a.code: a for a in accounts}

        missing = codes - set(accounts_by_code)
        if missing:
            raise NotFound(f"Accounts not found: {sorted(missing)}")

        for account in accounts_by_code.values():
            if not account.is_active:
                raise InvalidEntry(f"Account {account.code} is not active")

        return accounts_by_code

    def get_entry(self, entry_id: int) -> JournalEntry | None:
        """Return an entry with its lines loaded, or None."""
        return self.db.execute(
            select(JournalEntry)
            .options(selectinload(JournalEntry.lines))
            .where(JournalEntry.id == entry_id)
        ).scalar_one_or_none()

    def find_by_reference(self, reference: str) -> JournalEntry | None:
        return self.db.execute(
            select(JournalEntry).where(JournalEntry.reference == reference)
        ).scalar_one_or_none()

    def list_entries(
        self, filters: JournalEntryFilter | None = None
    ) -> list[JournalEntry]:
        """Return entries matching the filters, newest first."""
        filters = filters or JournalEntryFilter()
        query = select(JournalEntry)

        if filters.entry_type:
            query = query.where(JournalEntry.entry_type == filters.entry_type)
        if filters.status:
            query = query.where(JournalEntry.status == filters.status)
        if filters.reference:
            query = query.where(JournalEntry.reference == filters.reference)
        if filters.start_date:
            query = query.where(JournalEntry.entry_date >= filters.start_date)
        if filters.end_date:
            query = query.where(JournalEntry.entry_date <= filters.end_date)

        query = query.order_by(
            JournalEntry.entry_date.desc(), JournalEntry.id.desc()
        )
        return list(self.db.execute(query).scalars().all())

    def update_entry(
        self, entry_id: int, request: JournalEntryUpdate
    ) -> JournalEntry | None:
        """
        Change header fields of an entry. Lines are never touched;
        corrections to amounts are made by posting a new entry.
        """
        entry = self.db.get(JournalEntry, entry_id)
        if not entry:
            return None

        changes = request.model_dump(exclude_unset=True)
        # date and status are required columns; an explicit null means "leave it".
        for field in ("entry_date", "status"):
            if changes.get(field, ...) is None:
                del changes[field]

        new_reference = changes.get("reference")
        if new_reference and new_reference != entry.reference:
            if self.find_by_reference(new_reference):
                raise DuplicateReference(
                    f"Reference '{new_reference}' has already been posted"
                )

        try:
            with self.db.begin_nested():
                for field, value in changes.items():
                    setattr(entry, field, value)
        except IntegrityError as e:
            raise DuplicateReference(
                f"Reference '{new_reference}' has already been posted"
            ) from e
        except SQLAlchemyError as e:
            raise StorageFailure(f"Could not update journal entry: {e}") from e
        return entry

    def delete_entry(self, entry_id: int) -> bool:
        """
        Remove an entry: its lines first, then the header.

        Returns True if an entry was actually removed.
        """
        try:
            with self.db.begin_nested():
                self.db.execute(
                    delete(JournalEntryLine)
                    .where(JournalEntryLine.journal_entry_id == entry_id)
                )
                result = self.db.execute(
                    delete(JournalEntry).where(JournalEntry.id == entry_id)
                )
        except SQLAlchemyError as e:
            raise StorageFailure(f"Could not delete journal entry: {e}") from e
        return result.rowcount > 0

    def check_integrity(self) -> dict:
        """
        Verify the whole ledger balances.

        Sums every debit and every credit on non-draft entries. If
        each entry balanced on the way in, the totals agree.
        """
        total_debits, total_credits = self.db.execute(
            select(
                func.coalesce(func.sum(JournalEntryLine.debit), 0),
                func.coalesce(func.sum(JournalEntryLine.credit), 0),
            )
            .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
            .where(JournalEntry.status != EntryStatus.DRAFT)
        ).one()

        total_debits = Decimal(str(total_debits))
        total_credits = Decimal(str(total_credits))
        difference = total_debits - total_credits

        return {
            "total_debits": total_debits,
            "total_credits": total_credits,
            "difference": difference,
            "is_balanced": abs(difference) <= self.tolerance,
        }
