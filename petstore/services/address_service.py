# Address service module for business logic
import logging

from petstore import db
from petstore.exceptions import AddressInUseException, AddressNotFoundException, ValidationException
from petstore.models import Address
from petstore.services.order_service import exists_by_address_used

logger = logging.getLogger(__name__)

# request field -> column
ADDRESS_FIELDS = {
    'fullName': 'full_name',
    'phoneNumber': 'phone_number',
    'street': 'street',
    'city': 'city',
    'state': 'state',
    'postalCode': 'postal_code',
    'country': 'country',
}


def format_address(address):
    return {
        'id': address.id,
        'userId': address.user_id,
        'fullName': address.full_name,
        'phoneNumber': address.phone_number,
        'street': address.street,
        'city': address.city,
        'state': address.state,
        'postalCode': address.postal_code,
        'country': address.country,
        'isDefault': address.is_default,
        'fullAddress': address.full_address,
    }


def get_user_addresses(user_id):
    return Address.query.filter_by(user_id=user_id).order_by(Address.id).all()


def get_user_address(user_id, address_id):
    address = Address.query.filter_by(id=address_id, user_id=user_id).first()
    if address is None:
        raise AddressNotFoundException(address_id)
    return address


def _clear_default(user_id, keep_id=None):
    for other in get_user_addresses(user_id):
        if other.id != keep_id:
            other.is_default = False


def create_address(user_id, data):
    data = data or {}
    missing = [key for key in ADDRESS_FIELDS if not str(data.get(key) or '').strip()]
    if missing:
        raise ValidationException(f"Missing required address fields: {', '.join(missing)}")

    address = Address(user_id=user_id)
    for key, column in ADDRESS_FIELDS.items():
        setattr(address, column, str(data[key]).strip())

    # the first address of a user is always the default one
    first = Address.query.filter_by(user_id=user_id).count() == 0
    address.is_default = first or bool(data.get('isDefault'))
    if address.is_default and not first:
        _clear_default(user_id)
    db.session.add(address)
    db.session.commit()
    logger.info(f"Created address {address.id} for user {user_id}")
    return address


def update_address(user_id, address_id, data):
    address = get_user_address(user_id, address_id)
    data = data or {}
    for key, column in ADDRESS_FIELDS.items():
        if data.get(key) is not None:
            value = str(data[key]).strip()
            if not value:
                raise ValidationException(f"Field '{key}' must not be blank")
            setattr(address, column, value)
    if data.get('isDefault'):
        _clear_default(user_id, keep_id=address.id)
        address.is_default = True
    db.session.commit()
    logger.info(f"Updated address {address.id} for user {user_id}")
    return address


def delete_address(user_id, address_id):
    address = get_user_address(user_id, address_id)
    if exists_by_address_used(address.id):
        raise AddressInUseException(address.id)
    db.session.delete(address)
    db.session.commit()
    logger.info(f"Deleted address {address_id} of user {user_id}")
