import enum
from datetime import datetime

from petstore import db


class Role(enum.Enum):
    USER = 'USER'
    ADMIN = 'ADMIN'


class UserRole(db.Model):
    __tablename__ = 'user_role'
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), primary_key=True)
    role = db.Column(db.Enum(Role), primary_key=True)


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)
    first_name = db.Column(db.String(80), nullable=False)
    last_name = db.Column(db.String(80), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    role_links = db.relationship('UserRole', lazy='selectin', cascade='all, delete-orphan')
    addresses = db.relationship('Address', backref='user', lazy=True, cascade='all, delete-orphan')
    orders = db.relationship('Order', backref='user', lazy=True)
    owned_pets = db.relationship('Pet', foreign_keys='Pet.owner_id', backref='owner', lazy=True)

    @property
    def roles(self):
        return {link.role for link in self.role_links}

    @roles.setter
    def roles(self, roles):
        # reuse surviving rows; re-inserting them would collide with the pending deletes
        roles = set(roles)
        kept = [link for link in self.role_links if link.role in roles]
        added = sorted(roles - {link.role for link in kept}, key=lambda role: role.value)
        self.role_links = kept + [UserRole(role=role) for role in added]

    def has_role(self, *roles):
        return any(role in self.roles for role in roles)

    @property
    def is_admin(self):
        return Role.ADMIN in self.roles

    def __repr__(self):
        return f'<User {self.email}>'
