# Default data for a fresh database; every step skips what already exists
import logging
from decimal import Decimal

from petstore import db, bcrypt
from petstore.models import Category, Pet, PetStatus, Role, User

logger = logging.getLogger(__name__)

ADMIN_EMAIL = 'admin@pawfect.com'
ADMIN_PASSWORD = 'admin123'

DEFAULT_CATEGORIES = ['Dogs', 'Cats', 'Birds', 'Fish', 'Reptiles', 'Small Pets']

# name, category, price, description, tags
SAMPLE_PETS = [
    ('Buddy', 'Dogs', '450.00', 'Friendly golden retriever puppy', ['puppy', 'friendly']),
    ('Whiskers', 'Cats', '250.00', 'Calm tabby cat, litter trained', ['indoor']),
    ('Sunny', 'Birds', '80.00', 'Cheerful yellow canary', ['singing']),
    ('Nemo', 'Fish', '15.50', 'Clownfish for a tropical tank', ['saltwater']),
    ('Spike', 'Reptiles', '120.00', 'Bearded dragon, handles well', ['lizard']),
    ('Coco', 'Small Pets', '35.00', 'Young guinea pig', ['rodent']),
]


def seed_admin():
    admin = User.query.filter_by(email=ADMIN_EMAIL).first()
    if admin is not None:
        return admin
    admin = User(
        email=ADMIN_EMAIL,
        password=bcrypt.generate_password_hash(ADMIN_PASSWORD).decode('utf-8'),
        first_name='Admin',
        last_name='User',
    )
    admin.roles = {Role.ADMIN, Role.USER}
    db.session.add(admin)
    db.session.flush()
    logger.info(f"Created default admin {ADMIN_EMAIL}")
    return admin


def seed_categories():
    categories = {}
    for name in DEFAULT_CATEGORIES:
        category = Category.query.filter_by(name=name).first()
        if category is None:
            category = Category(name=name)
            db.session.add(category)
            logger.info(f"Created category {name}")
        categories[name] = category
    db.session.flush()
    return categories


def seed_pets(admin, categories):
    if Pet.query.count() > 0:
        return 0
    for name, category_name, price, description, tags in SAMPLE_PETS:
        db.session.add(Pet(
            name=name,
            description=description,
            price=Decimal(price),
            status=PetStatus.AVAILABLE,
            category_id=categories[category_name].id,
            created_by=admin.id,
            photo_urls=[],
            tags=tags,
        ))
    logger.info(f"Created {len(SAMPLE_PETS)} sample pets")
    return len(SAMPLE_PETS)


def seed_data():
    admin = seed_admin()
    categories = seed_categories()
    seed_pets(admin, categories)
    db.session.commit()
