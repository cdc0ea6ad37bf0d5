import enum

from petstore import db


class PaymentStatus(enum.Enum):
    PENDING = 'PENDING'
    SUCCESS = 'SUCCESS'
    FAILED = 'FAILED'


class PaymentType(enum.Enum):
    CREDIT_CARD = 'CREDIT_CARD'
    DEBIT_CARD = 'DEBIT_CARD'
    E_WALLET = 'E_WALLET'
    PAYPAL = 'PAYPAL'


class WalletType(enum.Enum):
    GRABPAY = 'GRABPAY'
    BOOSTPAY = 'BOOSTPAY'


class Payment(db.Model):
    __tablename__ = 'payment'
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('order.id'), unique=True, nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.Enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    payment_type = db.Column(db.Enum(PaymentType), nullable=False, default=PaymentType.CREDIT_CARD)
    payment_note = db.Column(db.String(255))
    paid_at = db.Column(db.DateTime)

    def __repr__(self):
        return f'<Payment {self.id} {self.payment_type.value if self.payment_type else None} for Order {self.order_id}>'
