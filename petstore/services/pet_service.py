# Pet service module for business logic
import logging
from datetime import datetime

from sqlalchemy import or_

from petstore import db
from petstore.exceptions import (
    AccessDeniedException,
    InvalidPetException,
    PetAlreadySoldException,
    PetInUseException,
    PetNotFoundException,
    UserNotFoundException,
)
from petstore.models import AuditAction, CartItem, OrderItem, Pet, PetStatus, User
from petstore.services import audit_service
from petstore.services.category_service import get_category_by_id
from petstore.utils.util import MAX_AMOUNT, money, parse_decimal, to_float, to_iso

logger = logging.getLogger(__name__)

LATEST_PETS_LIMIT = 6


def format_pet(pet):
    return {
        'id': pet.id,
        'name': pet.name,
        'description': pet.description,
        'price': to_float(pet.price),
        'status': pet.status.value,
        'categoryId': pet.category_id,
        'category': {'id': pet.category.id, 'name': pet.category.name} if pet.category else None,
        'ownerId': pet.owner_id,
        'createdBy': pet.created_by,
        'photoUrls': list(pet.photo_urls or []),
        'tags': list(pet.tags or []),
        'createdAt': to_iso(pet.created_at),
        'updatedAt': to_iso(pet.updated_at),
    }


def parse_pet_status(value):
    if isinstance(value, PetStatus):
        return value
    try:
        return PetStatus(str(value).strip().upper())
    except ValueError:
        raise InvalidPetException(
            f"Invalid pet status '{value}'. Allowed: {', '.join(s.value for s in PetStatus)}")


def _filtered_query(name=None, category_id=None, status=None):
    query = Pet.query
    if name:
        query = query.filter(Pet.name.ilike(f'%{name.strip()}%'))
    if category_id is not None:
        query = query.filter(Pet.category_id == category_id)
    if status:
        query = query.filter(Pet.status == parse_pet_status(status))
    return query.order_by(Pet.created_at.desc(), Pet.id.desc())


def find_pets(name=None, category_id=None, status=None, limit=None):
    query = _filtered_query(name, category_id, status)
    if limit is not None and limit > 0:
        query = query.limit(limit)
    return query.all()


def find_pets_paginated(name=None, category_id=None, status=None, user_id=None, page=0, size=10):
    """Zero-based page of pets, optionally restricted to pets owned or created by ``user_id``."""
    if page < 0:
        raise InvalidPetException('Page index must not be negative')
    if size < 1 or size > 100:
        raise InvalidPetException('Page size must be between 1 and 100')
    query = _filtered_query(name, category_id, status)
    if user_id is not None:
        query = query.filter(or_(Pet.owner_id == user_id, Pet.created_by == user_id))
    pagination = query.paginate(page=page + 1, per_page=size, error_out=False)
    return {
        'content': [format_pet(pet) for pet in pagination.items],
        'page': page,
        'size': size,
        'totalElements': pagination.total,
        'totalPages': pagination.pages,
    }


def get_latest_available_pets(limit=LATEST_PETS_LIMIT):
    return find_pets(status=PetStatus.AVAILABLE, limit=limit)


def get_pets_by_status(status):
    return find_pets(status=status)


def get_pet_by_id(pet_id):
    pet = db.session.get(Pet, pet_id)
    if pet is None:
        raise PetNotFoundException(pet_id)
    return pet


def get_pets_for_user(user):
    return (Pet.query
            .filter(or_(Pet.owner_id == user.id, Pet.created_by == user.id))
            .order_by(Pet.id)
            .all())


def _apply_fields(pet, data, partial):
    if 'name' in data or not partial:
        name = (data.get('name') or '').strip()
        if not name:
            raise InvalidPetException('Pet name is required')
        pet.name = name
    if 'price' in data or not partial:
        if data.get('price') is None:
            raise InvalidPetException('Pet price is required')
        price = parse_decimal(data['price'], 'price', MAX_AMOUNT)
        if price < 0:
            raise InvalidPetException('Pet price must not be negative')
        pet.price = money(price)
    if 'description' in data:
        pet.description = data['description']
    if 'status' in data and data['status'] is not None:
        pet.status = parse_pet_status(data['status'])
    if 'photoUrls' in data:
        pet.photo_urls = _string_list(data['photoUrls'], 'photoUrls')
    if 'tags' in data:
        pet.tags = _string_list(data['tags'], 'tags')
    if 'categoryId' in data:
        category_id = data['categoryId']
        pet.category_id = get_category_by_id(category_id).id if category_id is not None else None


def _string_list(value, field):
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidPetException(f"Field '{field}' must be a list")
    return [str(item) for item in value]


def save_pet(data, creator):
    data = data or {}
    pet = Pet(created_by=creator.id, status=PetStatus.AVAILABLE, photo_urls=[], tags=[])
    _apply_fields(pet, data, partial=False)
    if data.get('ownerId') is not None:
        if not creator.is_admin:
            raise AccessDeniedException('Only administrators can assign a pet owner')
        pet.owner_id = _existing_user_id(data['ownerId'])
    db.session.add(pet)
    db.session.commit()
    logger.info(f"User {creator.id} created pet '{pet.name}' (ID: {pet.id})")
    return pet


def update_pet(pet_id, data, caller):
    pet = get_pet_by_id(pet_id)
    if not caller.is_admin and pet.created_by != caller.id:
        raise AccessDeniedException('You can only update pets you created')
    data = data or {}
    _apply_fields(pet, data, partial=True)
    if 'ownerId' in data and data['ownerId'] != pet.owner_id:
        if not caller.is_admin:
            raise AccessDeniedException('Only administrators can change the pet owner')
        pet.owner_id = _existing_user_id(data['ownerId']) if data['ownerId'] is not None else None
    db.session.commit()
    logger.info(f"User {caller.id} updated pet {pet.id}")
    return pet


def _existing_user_id(user_id):
    if db.session.get(User, user_id) is None:
        raise UserNotFoundException(user_id)
    return user_id


def delete_pet(pet_id):
    pet = get_pet_by_id(pet_id)
    if OrderItem.query.filter_by(pet_id=pet.id).count() > 0:
        raise PetInUseException(pet.id)
    removed = CartItem.query.filter_by(pet_id=pet.id).delete(synchronize_session=False)
    db.session.delete(pet)
    db.session.commit()
    logger.info(f"Deleted pet {pet_id} (removed from {removed} cart(s))")


def update_pet_status(pet_id, status, changed_by=None):
    pet = get_pet_by_id(pet_id)
    new_status = parse_pet_status(status)
    old_status = pet.status
    pet.status = new_status
    audit_service.record('Pet', pet.id, changed_by, AuditAction.CHANGE_PET_STATUS, old_status, new_status)
    db.session.commit()
    logger.info(f"Pet {pet.id} status changed {old_status.value} -> {new_status.value}")
    return pet


def purchase_pet(pet_id, buyer):
    """Sell an available pet directly to ``buyer`` with a single conditional update."""
    updated = (Pet.query
               .filter(Pet.id == pet_id, Pet.status == PetStatus.AVAILABLE)
               .update({Pet.status: PetStatus.SOLD, Pet.owner_id: buyer.id, Pet.updated_at: datetime.utcnow()},
                       synchronize_session=False))
    if updated == 0:
        db.session.rollback()
        get_pet_by_id(pet_id)
        raise PetAlreadySoldException(pet_id)
    audit_service.record('Pet', pet_id, buyer.id, AuditAction.CHANGE_PET_STATUS, PetStatus.AVAILABLE, PetStatus.SOLD)
    db.session.commit()
    logger.info(f"User {buyer.id} purchased pet {pet_id}")
    return get_pet_by_id(pet_id)
