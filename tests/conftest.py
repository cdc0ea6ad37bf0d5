from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from petstore import create_app, db, bcrypt
from petstore.config import Config
from petstore.models import Address, Category, Discount, Pet, PetStatus, Role, User
from petstore.services.user_service import create_token


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SECRET_KEY = 'test-secret'
    JWT_SECRET_KEY = 'test-jwt-secret-key-that-is-long-enough'
    BCRYPT_LOG_ROUNDS = 4
    ORDER_NUMBER_GENERATOR = 'uuid'
    LOG_LEVEL = 'WARNING'


@pytest.fixture(scope='session')
def app():
    # the flask-restx Api is module level, so one app serves the whole session
    return create_app(TestConfig)


@pytest.fixture(autouse=True)
def database(app):
    with app.app_context():
        db.create_all()
        yield db
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email, roles=(Role.USER,), password='secret123', first_name='Test', last_name='User'):
    user = User(
        email=email,
        password=bcrypt.generate_password_hash(password).decode('utf-8'),
        first_name=first_name,
        last_name=last_name,
    )
    user.roles = set(roles)
    db.session.add(user)
    db.session.commit()
    return user


def auth_header(user):
    return {'Authorization': f'Bearer {create_token(user)}'}


def make_category(name='Dogs'):
    category = Category(name=name)
    db.session.add(category)
    db.session.commit()
    return category


def make_pet(name='Rex', price='100.00', status=PetStatus.AVAILABLE, category=None, created_by=None, owner=None):
    pet = Pet(
        name=name,
        price=Decimal(price),
        status=status,
        category_id=category.id if category else None,
        created_by=created_by.id if created_by else None,
        owner_id=owner.id if owner else None,
        photo_urls=[],
        tags=[],
    )
    db.session.add(pet)
    db.session.commit()
    return pet


def make_discount(code='SAVE10', percentage='10', active=True, valid_from=None, valid_to=None):
    now = datetime.utcnow()
    discount = Discount(
        code=code,
        percentage=Decimal(percentage),
        active=active,
        valid_from=valid_from or now - timedelta(days=1),
        valid_to=valid_to or now + timedelta(days=1),
    )
    db.session.add(discount)
    db.session.commit()
    return discount


def make_address(user, full_name='Jane Doe', is_default=True):
    address = Address(
        user_id=user.id,
        full_name=full_name,
        phone_number='+60123456789',
        street='1 Main Street',
        city='Kuala Lumpur',
        state='WP',
        postal_code='50000',
        country='Malaysia',
        is_default=is_default,
    )
    db.session.add(address)
    db.session.commit()
    return address


@pytest.fixture
def user():
    return make_user('user@example.com')


@pytest.fixture
def other_user():
    return make_user('other@example.com')


@pytest.fixture
def admin():
    return make_user('admin@example.com', roles=(Role.ADMIN, Role.USER))


@pytest.fixture
def user_headers(user):
    return auth_header(user)


@pytest.fixture
def admin_headers(admin):
    return auth_header(admin)
