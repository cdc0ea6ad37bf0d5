"""Order service: checkout, payment, delivery tracking and cancellation.

Order status only moves forward::

    PLACED -> APPROVED -> DELIVERED
    PLACED | APPROVED -> CANCELLED
"""
import logging
from datetime import datetime

from flask import current_app
from sqlalchemy import or_

from petstore import db
from petstore.exceptions import (
    AddressNotFoundException,
    CartEmptyException,
    InvalidOrderStateException,
    OrderNotFoundException,
    OrderOwnershipException,
    PetAlreadySoldException,
    UserCartNotFoundException,
    ValidationException,
)
from petstore.models import (
    Address,
    AuditAction,
    Delivery,
    DeliveryStatus,
    Order,
    OrderItem,
    OrderStatus,
    Payment,
    PaymentStatus,
    Pet,
    PetStatus,
)
from petstore.services import audit_service
from petstore.services.cart_service import cart_total, find_cart
from petstore.services.discount_service import apply_discount, validate_discount
from petstore.strategies import payment_strategy_factory
from petstore.utils.util import parse_datetime, to_float, to_iso

logger = logging.getLogger(__name__)


def format_payment(payment):
    return {
        'id': payment.id,
        'amount': to_float(payment.amount),
        'status': payment.status.value,
        'paymentType': payment.payment_type.value,
        'paymentNote': payment.payment_note,
        'paidAt': to_iso(payment.paid_at),
    }


def format_delivery(delivery):
    return {
        'id': delivery.id,
        'name': delivery.name,
        'phone': delivery.phone,
        'address': delivery.address,
        'status': delivery.status.value,
        'createdAt': to_iso(delivery.created_at),
        'shippedAt': to_iso(delivery.shipped_at),
        'deliveredAt': to_iso(delivery.delivered_at),
    }


def format_order(order):
    return {
        'id': order.id,
        'orderNumber': order.order_number,
        'userId': order.user_id,
        'status': order.status.value,
        'totalAmount': to_float(order.total_amount),
        'discountCode': order.discount_code,
        'discountPercentage': to_float(order.discount_percentage),
        'discountAmount': to_float(order.discount_amount),
        'shippingAddressId': order.shipping_address_id,
        'billingAddressId': order.billing_address_id,
        'items': [
            {
                'id': item.id,
                'petId': item.pet_id,
                'petName': item.pet.name if item.pet else None,
                'price': to_float(item.price),
            }
            for item in order.items
        ],
        'payment': format_payment(order.payment) if order.payment else None,
        'delivery': format_delivery(order.delivery) if order.delivery else None,
        'createdAt': to_iso(order.created_at),
        'updatedAt': to_iso(order.updated_at),
    }


# --- Queries ---

def get_all_orders():
    return Order.query.order_by(Order.id.desc()).all()


def get_orders_by_user_id(user_id):
    return Order.query.filter_by(user_id=user_id).order_by(Order.id.desc()).all()


def get_order_by_id(order_id):
    order = db.session.get(Order, order_id)
    if order is None:
        raise OrderNotFoundException(order_id)
    return order


def get_owned_order(order_id, user_id):
    """Order ``order_id`` if it belongs to ``user_id``; 404 when missing, 403 when foreign."""
    order = get_order_by_id(order_id)
    if order.user_id != user_id:
        raise OrderOwnershipException(order_id, user_id)
    return order


def exists_by_address_used(address_id):
    return Order.query.filter(
        or_(Order.shipping_address_id == address_id, Order.billing_address_id == address_id)
    ).count() > 0


# --- Checkout ---

def checkout(user_id, discount_code=None):
    cart = find_cart(user_id)
    if cart is None:
        raise UserCartNotFoundException(user_id)
    if not cart.items:
        raise CartEmptyException(user_id)

    discount = validate_discount(discount_code) if discount_code and discount_code.strip() else None

    # lock the pets so a concurrent sale cannot slip in between check and insert
    pet_ids = [item.pet_id for item in cart.items]
    pets = Pet.query.filter(Pet.id.in_(pet_ids)).order_by(Pet.id).with_for_update().all()
    for pet in pets:
        if pet.status != PetStatus.AVAILABLE:
            raise PetAlreadySoldException(pet.id)

    discount_amount, total = apply_discount(cart_total(cart), discount)
    order = Order(
        order_number=current_app.extensions['order_number_generator'].generate(),
        user_id=user_id,
        status=OrderStatus.PLACED,
        total_amount=total,
        items=[OrderItem(pet_id=item.pet_id, price=item.price) for item in cart.items],
    )
    if discount is not None:
        order.discount_id = discount.id
        order.discount_code = discount.code
        order.discount_percentage = discount.percentage
        order.discount_amount = discount_amount

    db.session.add(order)
    db.session.delete(cart)
    db.session.flush()
    audit_service.record('Order', order.id, user_id, AuditAction.CREATE_ORDER, None, OrderStatus.PLACED)
    db.session.commit()
    logger.info(f"User {user_id} checked out order {order.order_number} "
                f"({len(order.items)} item(s), total {order.total_amount})")
    return order


# --- Payment ---

def _order_user_address(order, address_id):
    address = Address.query.filter_by(id=address_id, user_id=order.user_id).first()
    if address is None:
        raise AddressNotFoundException(address_id)
    return address


def _sell_order_pets(order):
    pet_ids = [item.pet_id for item in order.items]
    updated = (Pet.query
               .filter(Pet.id.in_(pet_ids), Pet.status == PetStatus.AVAILABLE)
               .update({Pet.status: PetStatus.SOLD, Pet.owner_id: order.user_id, Pet.updated_at: datetime.utcnow()},
                       synchronize_session=False))
    if updated != len(pet_ids):
        db.session.rollback()
        unavailable = (Pet.query
                       .filter(Pet.id.in_(pet_ids), Pet.status != PetStatus.AVAILABLE)
                       .order_by(Pet.id)
                       .first())
        raise PetAlreadySoldException(unavailable.id if unavailable else pet_ids[0])
    return pet_ids


def make_payment(order_id, request):
    order = get_order_by_id(order_id)
    if order.status != OrderStatus.PLACED:
        raise InvalidOrderStateException(
            f"Order {order.id} cannot be paid because its status is {order.status.value}")

    strategy = payment_strategy_factory.get_strategy(request.payment_type)
    strategy.validate(request)

    if request.shipping_address_id is None:
        raise ValidationException('Shipping address is required')
    shipping = _order_user_address(order, request.shipping_address_id)
    billing = shipping
    if request.billing_address_id is not None:
        billing = _order_user_address(order, request.billing_address_id)

    pet_ids = _sell_order_pets(order)

    now = datetime.utcnow()
    payment = Payment(
        amount=order.total_amount,
        status=PaymentStatus.SUCCESS,
        payment_type=strategy.payment_type,
        paid_at=now,
    )
    strategy.process(payment, request)
    order.payment = payment
    order.status = OrderStatus.APPROVED
    order.shipping_address_id = shipping.id
    order.billing_address_id = billing.id
    order.delivery = Delivery(
        name=shipping.full_name,
        phone=shipping.phone_number,
        address=shipping.full_address,
        status=DeliveryStatus.PENDING,
        created_at=now,
    )

    for pet_id in pet_ids:
        audit_service.record('Pet', pet_id, order.user_id, AuditAction.CHANGE_PET_STATUS,
                             PetStatus.AVAILABLE, PetStatus.SOLD)
    audit_service.record('Order', order.id, order.user_id, AuditAction.CHECKOUT_ORDER,
                         OrderStatus.PLACED, OrderStatus.APPROVED)
    db.session.commit()
    logger.info(f"Order {order.order_number} paid by {payment.payment_type.value}: {payment.amount}")
    return order


# --- Delivery ---

def parse_delivery_status(value):
    try:
        return DeliveryStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationException(
            f"Invalid delivery status '{value}'. Allowed: {', '.join(s.value for s in DeliveryStatus)}")


def update_order_delivery_status(order_id, status, date=None, changed_by=None):
    order = get_order_by_id(order_id)
    new_status = parse_delivery_status(status)
    if order.status == OrderStatus.CANCELLED:
        raise InvalidOrderStateException(f"Order {order.id} is cancelled")
    if order.delivery is None:
        raise InvalidOrderStateException(f"Order {order.id} has no delivery; it must be paid first")

    when = parse_datetime(date, 'date') if date else datetime.utcnow()
    delivery = order.delivery
    old_status = delivery.status
    delivery.status = new_status
    if new_status == DeliveryStatus.SHIPPED:
        delivery.shipped_at = when
    elif new_status == DeliveryStatus.DELIVERED:
        delivery.delivered_at = when
        order.status = OrderStatus.DELIVERED

    audit_service.record('Delivery', delivery.id, changed_by, AuditAction.UPDATE_DELIVERY_STATUS,
                         old_status, new_status)
    db.session.commit()
    logger.info(f"Order {order.order_number} delivery {old_status.value} -> {new_status.value}")
    return order


# --- Cancellation ---

def _cancel(order, action, changed_by):
    if order.status == OrderStatus.CANCELLED:
        return order
    if order.status == OrderStatus.DELIVERED:
        raise InvalidOrderStateException(f"Order {order.id} has already been delivered")
    old_status = order.status
    order.status = OrderStatus.CANCELLED
    audit_service.record('Order', order.id, changed_by, action, old_status, OrderStatus.CANCELLED)
    db.session.commit()
    logger.info(f"Order {order.order_number} {old_status.value} -> CANCELLED ({action.value})")
    return order


def cancel_order(order_id, changed_by=None):
    return _cancel(get_order_by_id(order_id), AuditAction.CANCEL_ORDER, changed_by)


def delete_order(order_id, changed_by=None):
    """Soft delete: the row stays, its status becomes CANCELLED."""
    return _cancel(get_order_by_id(order_id), AuditAction.DELETE_ORDER, changed_by)
