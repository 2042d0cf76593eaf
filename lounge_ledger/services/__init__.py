"""Business logic services."""

from lounge_ledger.services.chart_service import ChartOfAccountsService
from lounge_ledger.services.ledger_service import LedgerService
from lounge_ledger.services.posting_service import PostingService
from lounge_ledger.services.sync_service import SyncService
from lounge_ledger.services.report_service import ReportService

__all__ = [
    "ChartOfAccountsService",
    "LedgerService",
    "PostingService",
    "SyncService",
    "ReportService",
]
