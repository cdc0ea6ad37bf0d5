import enum
from datetime import datetime

from petstore import db


class DeliveryStatus(enum.Enum):
    PENDING = 'PENDING'
    SHIPPED = 'SHIPPED'
    DELIVERED = 'DELIVERED'


class Delivery(db.Model):
    __tablename__ = 'delivery'
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('order.id'), unique=True, nullable=False)
    name = db.Column(db.String(120))
    phone = db.Column(db.String(40))
    address = db.Column(db.String(500))
    status = db.Column(db.Enum(DeliveryStatus), nullable=False, default=DeliveryStatus.PENDING)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    shipped_at = db.Column(db.DateTime)
    delivered_at = db.Column(db.DateTime)
