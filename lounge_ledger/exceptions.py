"""
Accounting errors.

Validation failures subclass ValueError so the API layer can
keep treating "bad request" uniformly. Lookups that find nothing
subclass LookupError. StorageFailure wraps database errors.
"""


class LedgerError(Exception):
    """Base class for every accounting error."""


class DuplicateCode(LedgerError, ValueError):
    """A chart of accounts code is already taken."""


class UnbalancedEntry(LedgerError, ValueError):
    """Debits and credits of a proposed entry differ beyond tolerance."""


class InvalidEntry(LedgerError, ValueError):
    """A proposed entry is malformed (no lines, inactive account, ...)."""


class DuplicateReference(LedgerError, ValueError):
    """A journal entry with this reference has already been posted."""


class NotFound(LedgerError, LookupError):
    """An account or entry lookup found nothing."""


class StorageFailure(LedgerError):
    """The database rejected or failed an operation."""
