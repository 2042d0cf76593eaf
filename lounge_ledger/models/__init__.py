"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from lounge_ledger.models.base import Base
from lounge_ledger.models.enums import (
    AccountType,
    EntryStatus,
    OrderStatus,
    MovementType,
    MovementReferenceType,
    PostingStatus,
)
from lounge_ledger.models.audit_log import AuditLog
from lounge_ledger.models.chart_account import ChartAccount
from lounge_ledger.models.journal_entry import JournalEntry, JournalEntryLine
from lounge_ledger.models.pos import (
    Order,
    OrderItem,
    InventoryItem,
    InventoryMovement,
)

__all__ = [
    "Base",
    "AccountType",
    "EntryStatus",
    "OrderStatus",
    "MovementType",
    "MovementReferenceType",
    "PostingStatus",
    "AuditLog",
    "ChartAccount",
    "JournalEntry",
    "JournalEntryLine",
    "Order",
    "OrderItem",
    "InventoryItem",
    "InventoryMovement",
]
