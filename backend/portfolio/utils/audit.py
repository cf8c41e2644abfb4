from typing import Optional

from flask import has_request_context
from flask_jwt_extended import get_jwt_identity
from portfolio.extensions import db
from portfolio.models.audit_log import AuditLog

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    """
    Stage an audit entry for the current admin. The caller commits it.
    """
    if not has_request_context():
        return  # Skip logging outside of a request (CLI, services under test)

    actor_id = get_jwt_identity()
    if not actor_id:
        return  # Skip logging if user context is missing

    log = AuditLog()
    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)
