from datetime import datetime

from petstore import db


class Cart(db.Model):
    __tablename__ = 'cart'
    id = db.Column(db.Integer, primary_key=True)
    # one cart per user
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    user = db.relationship('User', backref=db.backref('cart', uselist=False, cascade='all, delete-orphan'))
    items = db.relationship('CartItem', backref='cart', lazy=True, order_by='CartItem.id',
                            cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Cart {self.id} of User {self.user_id}>'


class CartItem(db.Model):
    __tablename__ = 'cart_item'
    __table_args__ = (db.UniqueConstraint('cart_id', 'pet_id', name='uq_cart_item_cart_pet'),)
    id = db.Column(db.Integer, primary_key=True)
    cart_id = db.Column(db.Integer, db.ForeignKey('cart.id'), nullable=False)
    pet_id = db.Column(db.Integer, db.ForeignKey('pet.id'), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    pet = db.relationship('Pet', lazy='joined')
