# Cart service module for business logic
import logging

from sqlalchemy.exc import IntegrityError

from petstore import db
from petstore.exceptions import (
    CartItemNotFoundException,
    PetAlreadyExistInUserCartException,
    PetAlreadySoldException,
    UserCartNotFoundException,
    ValidationException,
)
from petstore.models import Cart, CartItem, PetStatus
from petstore.services.discount_service import apply_discount, validate_discount
from petstore.services.pet_service import get_pet_by_id
from petstore.utils.util import MAX_AMOUNT, money, parse_decimal, to_float, to_iso

logger = logging.getLogger(__name__)


def format_cart_item(item):
    return {
        'id': item.id,
        'petId': item.pet_id,
        'petName': item.pet.name if item.pet else None,
        'petStatus': item.pet.status.value if item.pet else None,
        'price': to_float(item.price),
    }


def cart_total(cart):
    return money(sum((item.price for item in cart.items), money(0)))


def format_cart(cart):
    return {
        'id': cart.id,
        'userId': cart.user_id,
        'items': [format_cart_item(item) for item in cart.items],
        'itemCount': len(cart.items),
        'totalPrice': to_float(cart_total(cart)),
        'createdAt': to_iso(cart.created_at),
    }


def find_cart(user_id):
    return Cart.query.filter_by(user_id=user_id).first()


def get_cart_by_user_id(user_id):
    cart = find_cart(user_id)
    if cart is None:
        raise UserCartNotFoundException(user_id)
    return cart


def add_pet_to_cart(user_id, pet_id):
    pet = get_pet_by_id(pet_id)
    if pet.status == PetStatus.SOLD:
        raise PetAlreadySoldException(pet.id)

    cart = find_cart(user_id)
    if cart is None:
        cart = Cart(user_id=user_id)
        db.session.add(cart)
    elif any(item.pet_id == pet.id for item in cart.items):
        raise PetAlreadyExistInUserCartException(pet.id)

    cart.items.append(CartItem(pet_id=pet.id, price=pet.price))
    try:
        db.session.commit()
    except IntegrityError:
        # a concurrent request added the same pet first
        db.session.rollback()
        raise PetAlreadyExistInUserCartException(pet.id)
    logger.info(f"Added pet {pet.id} to cart of user {user_id}")
    return cart


def remove_cart_item(user_id, item_id):
    cart = get_cart_by_user_id(user_id)
    item = CartItem.query.filter_by(id=item_id, cart_id=cart.id).first()
    if item is None:
        raise CartItemNotFoundException(item_id)
    cart.items.remove(item)
    db.session.commit()
    logger.info(f"Removed cart item {item_id} from cart of user {user_id}")
    return cart


def preview_discount(code, total):
    """Discount a cart total would receive with ``code``."""
    discount = validate_discount(code)
    total = parse_decimal(total, 'total', MAX_AMOUNT)
    if total < 0:
        raise ValidationException('Total must not be negative')
    discount_amount, new_total = apply_discount(total, discount)
    return {
        'code': discount.code,
        'percentage': to_float(discount.percentage),
        'discountAmount': to_float(discount_amount),
        'newTotal': to_float(new_total),
    }
