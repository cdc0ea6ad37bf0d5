from datetime import datetime

from petstore import db


class Discount(db.Model):
    __tablename__ = 'discount'
    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(20), unique=True, nullable=False)
    percentage = db.Column(db.Numeric(5, 2), nullable=False)
    valid_from = db.Column(db.DateTime, nullable=False)
    valid_to = db.Column(db.DateTime, nullable=False)
    description = db.Column(db.String(200))
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def is_within_window(self, now=None):
        now = now or datetime.utcnow()
        return self.valid_from <= now <= self.valid_to

    def __repr__(self):
        return f'<Discount {self.code} {self.percentage}%>'
