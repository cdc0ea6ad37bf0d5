import enum
from datetime import datetime

from petstore import db


class OrderStatus(enum.Enum):
    PLACED = 'PLACED'
    APPROVED = 'APPROVED'
    CANCELLED = 'CANCELLED'
    DELIVERED = 'DELIVERED'


class Order(db.Model):
    __tablename__ = 'order'
    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(40), unique=True, nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    status = db.Column(db.Enum(OrderStatus), nullable=False, default=OrderStatus.PLACED)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    discount_id = db.Column(db.Integer, db.ForeignKey('discount.id'), nullable=True)
    # values copied from the discount when the order was placed
    discount_code = db.Column(db.String(20))
    discount_percentage = db.Column(db.Numeric(5, 2))
    discount_amount = db.Column(db.Numeric(10, 2))
    shipping_address_id = db.Column(db.Integer, db.ForeignKey('address.id'), nullable=True)
    billing_address_id = db.Column(db.Integer, db.ForeignKey('address.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    items = db.relationship('OrderItem', backref='order', lazy=True, order_by='OrderItem.id',
                            cascade='all, delete-orphan')
    payment = db.relationship('Payment', backref='order', uselist=False, cascade='all, delete-orphan')
    delivery = db.relationship('Delivery', backref='order', uselist=False, cascade='all, delete-orphan')
    discount = db.relationship('Discount')
    shipping_address = db.relationship('Address', foreign_keys=[shipping_address_id])
    billing_address = db.relationship('Address', foreign_keys=[billing_address_id])

    def __repr__(self):
        return f'<Order {self.order_number} by User {self.user_id}>'


class OrderItem(db.Model):
    __tablename__ = 'order_item'
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('order.id'), nullable=False)
    pet_id = db.Column(db.Integer, db.ForeignKey('pet.id'), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    pet = db.relationship('Pet')
