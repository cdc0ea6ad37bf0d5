# Category service module for business logic
import logging

from sqlalchemy import func

from petstore import db
from petstore.exceptions import (
    CategoryAlreadyExistsException,
    CategoryInUseException,
    CategoryNotFoundException,
    InvalidCategoryException,
)
from petstore.models import Category, Pet
from petstore.utils.util import to_iso

logger = logging.getLogger(__name__)


def format_category(category):
    return {
        'id': category.id,
        'name': category.name,
        'createdAt': to_iso(category.created_at),
        'updatedAt': to_iso(category.updated_at),
    }


def get_all_categories():
    return Category.query.order_by(Category.id).all()


def get_category_by_id(category_id):
    category = db.session.get(Category, category_id)
    if category is None:
        raise CategoryNotFoundException(category_id)
    return category


def _clean_name(data):
    name = ((data or {}).get('name') or '').strip()
    if not name:
        raise InvalidCategoryException('Category name is required')
    if len(name) > 100:
        raise InvalidCategoryException('Category name must be at most 100 characters')
    return name


def _find_by_name(name):
    return Category.query.filter(func.lower(Category.name) == name.lower()).first()


def save_category(data):
    name = _clean_name(data)
    if _find_by_name(name) is not None:
        raise CategoryAlreadyExistsException(name)
    category = Category(name=name)
    db.session.add(category)
    db.session.commit()
    logger.info(f"Created category '{name}' (ID: {category.id})")
    return category


def update_category(category_id, data):
    category = get_category_by_id(category_id)
    name = _clean_name(data)
    existing = _find_by_name(name)
    if existing is not None and existing.id != category.id:
        raise CategoryAlreadyExistsException(name)
    category.name = name
    db.session.commit()
    logger.info(f"Updated category {category.id} to '{name}'")
    return category


def delete_category(category_id):
    category = get_category_by_id(category_id)
    pet_count = Pet.query.filter_by(category_id=category.id).count()
    if pet_count > 0:
        raise CategoryInUseException(category.id, category.name, pet_count)
    db.session.delete(category)
    db.session.commit()
    logger.info(f"Deleted category '{category.name}' (ID: {category_id})")
