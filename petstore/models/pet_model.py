import enum
from datetime import datetime

from petstore import db


class PetStatus(enum.Enum):
    AVAILABLE = 'AVAILABLE'
    PENDING = 'PENDING'
    SOLD = 'SOLD'


class Pet(db.Model):
    __tablename__ = 'pet'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500))
    price = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.Enum(PetStatus), nullable=False, default=PetStatus.AVAILABLE)
    category_id = db.Column(db.Integer, db.ForeignKey('category.id'), nullable=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    created_by = db.Column(db.Integer, nullable=True)
    photo_urls = db.Column(db.JSON, nullable=False, default=list)
    tags = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<Pet {self.name} ({self.status.value if self.status else None})>'
