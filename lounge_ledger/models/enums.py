"""
Shared enumerations for database models and schemas.

Accounting enums store their lowercase values in the database
(see ``enum_values``), matching what the POS front end sends.
POS enums mirror the status strings the POS tables already hold.
"""

import enum


def enum_values(enum_cls) -> list[str]:
    """values_callable for SAEnum: persist .value instead of .name."""
    return [member.value for member in enum_cls]


class AccountType(str, enum.Enum):
    """The five fundamental accounting categories."""
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class EntryStatus(str, enum.Enum):
    """Lifecycle of a journal entry. Reports ignore drafts."""
    DRAFT = "draft"
    POSTED = "posted"
    VOID = "void"


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class MovementType(str, enum.Enum):
    """Direction of an inventory stock movement."""
    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"
    TRANSFER = "TRANSFER"


class MovementReferenceType(str, enum.Enum):
    """Business reason recorded against a stock movement."""
    PURCHASE_ORDER = "PURCHASE_ORDER"
    SALES_ORDER = "SALES_ORDER"
    ADJUSTMENT = "ADJUSTMENT"
    TRANSFER = "TRANSFER"
    WASTE = "WASTE"
    THEFT = "THEFT"
    DAMAGE = "DAMAGE"


# Stock leaving the shelf for these reasons is a loss, not a sale.
LOSS_REFERENCE_TYPES = frozenset({
    MovementReferenceType.WASTE,
    MovementReferenceType.DAMAGE,
    MovementReferenceType.THEFT,
})


class PostingStatus(str, enum.Enum):
    """What happened when a business event was mapped to the ledger."""
    POSTED = "posted"
    SKIPPED = "skipped"
    DUPLICATE = "duplicate"
    FAILED = "failed"
