"""Append-only activity trail for accounting actions."""

import json
import logging

from sqlalchemy.orm import Session

from lounge_ledger.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def record_event(
    db: Session,
    event_type: str,
    details: dict,
    actor_id: int | None = None,
    reference: str | None = None,
) -> AuditLog:
    """Add an audit record to the session. The caller commits."""
    log = AuditLog(
        event_type=event_type,
        actor_id=actor_id,
        reference=reference,
        details=json.dumps(details, default=str, sort_keys=True),
    )
    db.add(log)
    logger.info("%s by actor %s (%s)", event_type, actor_id, reference or "-")
    return log
