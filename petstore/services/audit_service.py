# Audit log service: rows are only ever appended
import enum
import logging

from petstore import db
from petstore.models.audit_model import AuditLog

logger = logging.getLogger(__name__)


def record(entity_type, entity_id, user_id, action, old_value=None, new_value=None):
    """Add an audit row to the current session; the caller commits."""
    entry = AuditLog(
        entity_type=entity_type,
        entity_id=entity_id,
        user_id=user_id,
        action=action.value,
        old_value=_as_text(old_value),
        new_value=_as_text(new_value),
    )
    db.session.add(entry)
    logger.debug(f"Audit {action.value} on {entity_type}#{entity_id} by user {user_id}: {old_value} -> {new_value}")
    return entry


def get_entries(entity_type=None, entity_id=None):
    query = AuditLog.query
    if entity_type is not None:
        query = query.filter_by(entity_type=entity_type)
    if entity_id is not None:
        query = query.filter_by(entity_id=entity_id)
    return query.order_by(AuditLog.id).all()


def _as_text(value):
    if value is None:
        return None
    if isinstance(value, enum.Enum):
        return value.value
    return str(value)
