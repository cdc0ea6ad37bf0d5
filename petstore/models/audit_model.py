import enum
from datetime import datetime

from petstore import db


class AuditAction(enum.Enum):
    CREATE_ORDER = 'CREATE_ORDER'
    CHECKOUT_ORDER = 'CHECKOUT_ORDER'
    CANCEL_ORDER = 'CANCEL_ORDER'
    DELETE_ORDER = 'DELETE_ORDER'
    UPDATE_DELIVERY_STATUS = 'UPDATE_DELIVERY_STATUS'
    CHANGE_PET_STATUS = 'CHANGE_PET_STATUS'


class AuditLog(db.Model):
    __tablename__ = 'audit_log'
    id = db.Column(db.Integer, primary_key=True)
    entity_type = db.Column(db.String(100), nullable=False)
    entity_id = db.Column(db.Integer)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'), nullable=True)
    action = db.Column(db.String(50), nullable=False)
    old_value = db.Column(db.String(100))
    new_value = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f'<AuditLog {self.action} {self.entity_type}#{self.entity_id}>'
