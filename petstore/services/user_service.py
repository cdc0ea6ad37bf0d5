# User service module for business logic
import logging
import re

from flask_jwt_extended import create_access_token

from petstore import db, bcrypt
from petstore.exceptions import (
    AuthenticationFailedException,
    EmailAlreadyInUseException,
    InvalidUserException,
    UserInUseException,
    UserNotFoundException,
    ValidationException,
)
from petstore.models import Order, Pet, Role, User
from petstore.utils.util import to_iso

logger = logging.getLogger(__name__)

PASSWORD_REGEX = re.compile(r'^(?=.*[A-Za-z])(?=.*\d).{6,}$')
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')


def format_user(user):
    return {
        'id': user.id,
        'email': user.email,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'roles': sorted(role.value for role in user.roles),
        'createdAt': to_iso(user.created_at),
        'updatedAt': to_iso(user.updated_at),
    }


def create_token(user):
    return create_access_token(
        identity=str(user.id),
        additional_claims={'roles': sorted(role.value for role in user.roles)},
    )


def _hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def _validate_email(email):
    if not email or not EMAIL_REGEX.match(email):
        raise ValidationException('Invalid email format')


def _validate_password(password):
    if not password or not PASSWORD_REGEX.match(password):
        raise ValidationException(
            'Password must be at least 6 characters and contain at least one letter and one digit')


def register_user(data):
    data = data or {}
    missing = [key for key in ('email', 'password', 'firstName', 'lastName') if not data.get(key)]
    if missing:
        raise ValidationException(f"Missing required fields: {', '.join(missing)}")

    email = data['email'].strip().lower()
    _validate_email(email)
    _validate_password(data['password'])
    if get_user_by_email(email) is not None:
        raise EmailAlreadyInUseException(email)

    user = User(
        email=email,
        password=_hash_password(data['password']),
        first_name=data['firstName'].strip(),
        last_name=data['lastName'].strip(),
    )
    # self-registration never grants ADMIN
    user.roles = {Role.USER}
    db.session.add(user)
    db.session.commit()
    logger.info(f"Registered user {user.email} (ID: {user.id})")
    return user


def authenticate(email, password):
    user = get_user_by_email((email or '').strip().lower())
    if user is None or not password or not bcrypt.check_password_hash(user.password, password):
        logger.warning(f"Failed login attempt for {email}")
        raise AuthenticationFailedException('Invalid email or password')
    return user


def get_all_users():
    return User.query.order_by(User.id).all()


def get_user_by_id(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise UserNotFoundException(user_id)
    return user


def get_user_by_email(email):
    return User.query.filter_by(email=email).first()


def update_user(user_id, data, allow_role_change=False):
    user = get_user_by_id(user_id)
    data = data or {}

    if data.get('firstName') is not None:
        user.first_name = data['firstName'].strip()
    if data.get('lastName') is not None:
        user.last_name = data['lastName'].strip()
    if data.get('email') is not None:
        email = data['email'].strip().lower()
        _validate_email(email)
        existing = get_user_by_email(email)
        if existing is not None and existing.id != user.id:
            raise EmailAlreadyInUseException(email)
        user.email = email
    if data.get('password'):
        _validate_password(data['password'])
        user.password = _hash_password(data['password'])
    if data.get('roles') is not None:
        if not allow_role_change:
            raise InvalidUserException('Only administrators can change roles')
        try:
            roles = {Role(str(role).upper()) for role in data['roles']}
        except ValueError:
            raise ValidationException(f"Invalid roles: {data['roles']}")
        if not roles:
            raise InvalidUserException('A user must have at least one role')
        user.roles = roles

    db.session.commit()
    logger.info(f"Updated user {user.id}")
    return user


def delete_user(user_id):
    user = get_user_by_id(user_id)
    owned = Pet.query.filter_by(owner_id=user.id).count()
    created = Pet.query.filter_by(created_by=user.id).count()
    orders = Order.query.filter_by(user_id=user.id).count()
    if owned or created or orders:
        raise UserInUseException(user.id, user.email, owned, created, orders)

    db.session.delete(user)
    db.session.commit()
    logger.info(f"Deleted user {user_id}")
