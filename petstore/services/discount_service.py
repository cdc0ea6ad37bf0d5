# Discount service module for business logic
import logging
from datetime import datetime
from decimal import Decimal

from flask_restx import inputs
from sqlalchemy import func

from petstore import db
from petstore.exceptions import (
    DiscountAlreadyExistsException,
    DiscountInUseException,
    DiscountNotFoundException,
    InvalidDiscountException,
)
from petstore.models import Discount, Order
from petstore.utils.util import money, parse_datetime, parse_decimal, to_float, to_iso

logger = logging.getLogger(__name__)

INVALID_CODE_MESSAGE = 'Invalid or expired discount code'
MAX_CODE_LENGTH = 20


def format_discount(discount):
    return {
        'id': discount.id,
        'code': discount.code,
        'percentage': to_float(discount.percentage),
        'validFrom': to_iso(discount.valid_from),
        'validTo': to_iso(discount.valid_to),
        'description': discount.description,
        'active': discount.active,
        'createdAt': to_iso(discount.created_at),
        'updatedAt': to_iso(discount.updated_at),
    }


def get_all_discounts():
    return Discount.query.order_by(Discount.id).all()


def get_discount_by_id(discount_id):
    discount = db.session.get(Discount, discount_id)
    if discount is None:
        raise DiscountNotFoundException(discount_id)
    return discount


def _find_by_code(code):
    return Discount.query.filter(func.upper(Discount.code) == code.upper()).first()


def _apply_fields(discount, data):
    code = (data.get('code') or '').strip().upper()
    if not code:
        raise InvalidDiscountException('Discount code is required')
    if len(code) > MAX_CODE_LENGTH:
        raise InvalidDiscountException(f'Discount code must be at most {MAX_CODE_LENGTH} characters')

    if data.get('percentage') is None:
        raise InvalidDiscountException('Discount percentage is required')
    percentage = parse_decimal(data['percentage'], 'percentage')
    if percentage <= 0 or percentage > 100:
        raise InvalidDiscountException('Discount percentage must be greater than 0 and at most 100')

    if not data.get('validFrom') or not data.get('validTo'):
        raise InvalidDiscountException('Discount validFrom and validTo are required')
    valid_from = parse_datetime(data['validFrom'], 'validFrom')
    valid_to = parse_datetime(data['validTo'], 'validTo')
    if valid_from > valid_to:
        raise InvalidDiscountException('Discount validFrom must not be after validTo')

    discount.code = code
    discount.percentage = money(percentage)
    discount.valid_from = valid_from
    discount.valid_to = valid_to
    discount.description = data.get('description')
    if data.get('active') is not None:
        try:
            discount.active = inputs.boolean(data['active'])
        except ValueError:
            raise InvalidDiscountException('Discount active flag must be a boolean')


def save_discount(data):
    data = data or {}
    discount = Discount(active=True)
    _apply_fields(discount, data)
    if _find_by_code(discount.code) is not None:
        raise DiscountAlreadyExistsException(discount.code)
    db.session.add(discount)
    db.session.commit()
    logger.info(f"Created discount {discount.code} ({discount.percentage}%)")
    return discount


def update_discount(discount_id, data):
    discount = get_discount_by_id(discount_id)
    data = data or {}
    code = (data.get('code') or '').strip()
    existing = _find_by_code(code) if code else None
    if existing is not None and existing.id != discount.id:
        raise DiscountAlreadyExistsException(code.upper())
    _apply_fields(discount, data)
    db.session.commit()
    logger.info(f"Updated discount {discount.id} ({discount.code})")
    return discount


def delete_discount(discount_id):
    discount = get_discount_by_id(discount_id)
    if Order.query.filter_by(discount_id=discount.id).count() > 0:
        raise DiscountInUseException(discount.id)
    db.session.delete(discount)
    db.session.commit()
    logger.info(f"Deleted discount {discount_id}")


def validate_discount(code, now=None):
    """Return the discount for ``code`` or raise; all rejection reasons look the same to the caller."""
    code = (code or '').strip()
    discount = _find_by_code(code) if code else None
    if discount is None or not discount.active or not discount.is_within_window(now or datetime.utcnow()):
        logger.warning(f"Rejected discount code '{code}'")
        raise InvalidDiscountException(INVALID_CODE_MESSAGE)
    return discount


def get_all_active_discounts(now=None):
    now = now or datetime.utcnow()
    return (Discount.query
            .filter(Discount.active.is_(True), Discount.valid_from <= now, Discount.valid_to >= now)
            .order_by(Discount.id)
            .all())


def apply_discount(total, discount):
    """Return ``(discount_amount, new_total)`` rounded to cents."""
    total = money(total)
    if discount is None:
        return money(0), total
    amount = money(total * Decimal(discount.percentage) / Decimal(100))
    return amount, money(total - amount)
