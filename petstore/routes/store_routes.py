
from flask import request
from flask_jwt_extended import current_user
from flask_restx import Namespace, Resource, fields, reqparse

from petstore.exceptions import AccessDeniedException, ValidationException
from petstore.models import Role
from petstore.services import cart_service, order_service
from petstore.services.cart_service import format_cart
from petstore.services.order_service import format_order
from petstore.strategies import PaymentRequest
from petstore.utils.util import role_required


store_ns = Namespace('stores', description='Cart, checkout and orders', path='/api/stores')

payment_model = store_ns.model('PaymentRequest', {
    'paymentType': fields.String(required=True, enum=['CREDIT_CARD', 'DEBIT_CARD', 'E_WALLET', 'PAYPAL']),
    'shippingAddressId': fields.Integer(required=True),
    'billingAddressId': fields.Integer(description='Defaults to the shipping address'),
    'cardNumber': fields.String(),
    'walletType': fields.String(enum=['GRABPAY', 'BOOSTPAY']),
    'walletId': fields.String(),
    'paypalId': fields.String(),
})

delivery_model = store_ns.model('DeliveryStatusUpdate', {
    'status': fields.String(required=True, enum=['PENDING', 'SHIPPED', 'DELIVERED']),
    'date': fields.DateTime(dt_format='iso8601', description='Defaults to now'),
})

checkout_parser = reqparse.RequestParser()
checkout_parser.add_argument('discountCode', type=str, location='args', help='Optional discount code')

discount_preview_parser = reqparse.RequestParser()
discount_preview_parser.add_argument('code', type=str, required=True, location='args')
discount_preview_parser.add_argument('total', type=str, required=True, location='args', help='Cart total')


@store_ns.route('/orders')
class OrderList(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @store_ns.doc(security='BearerAuth')
    def get(self):
        """All orders for administrators, the caller's own orders otherwise"""
        if current_user.is_admin:
            orders = order_service.get_all_orders()
        else:
            orders = order_service.get_orders_by_user_id(current_user.id)
        return [format_order(o) for o in orders], 200


@store_ns.route('/cart/add/<int:pet_id>')
class CartAdd(Resource):
    @role_required(Role.USER)
    @store_ns.doc(security='BearerAuth')
    def post(self, pet_id):
        cart = cart_service.add_pet_to_cart(current_user.id, pet_id)
        return format_cart(cart), 200


@store_ns.route('/cart')
class MyCart(Resource):
    @role_required(Role.USER)
    @store_ns.doc(security='BearerAuth')
    def get(self):
        return format_cart(cart_service.get_cart_by_user_id(current_user.id)), 200


@store_ns.route('/cart/<int:user_id>')
class UserCart(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @store_ns.doc(security='BearerAuth')
    def get(self, user_id):
        if not current_user.is_admin and current_user.id != user_id:
            raise AccessDeniedException('You can only view your own cart')
        return format_cart(cart_service.get_cart_by_user_id(user_id)), 200


@store_ns.route('/cart/item/<int:item_id>')
class CartItemResource(Resource):
    @role_required(Role.USER)
    @store_ns.doc(security='BearerAuth')
    def delete(self, item_id):
        cart = cart_service.remove_cart_item(current_user.id, item_id)
        return format_cart(cart), 200


@store_ns.route('/cart/discount/validate')
class CartDiscountPreview(Resource):
    @role_required(Role.USER)
    @store_ns.expect(discount_preview_parser)
    @store_ns.doc(security='BearerAuth')
    def get(self):
        args = discount_preview_parser.parse_args()
        return cart_service.preview_discount(args['code'], args['total']), 200


@store_ns.route('/checkout')
class Checkout(Resource):
    @role_required(Role.USER)
    @store_ns.expect(checkout_parser)
    @store_ns.doc(security='BearerAuth')
    def post(self):
        """Turn the caller's cart into a PLACED order"""
        args = checkout_parser.parse_args()
        order = order_service.checkout(current_user.id, args['discountCode'])
        return format_order(order), 201


@store_ns.route('/order/<int:order_id>')
class OrderResource(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @store_ns.doc(security='BearerAuth')
    def get(self, order_id):
        if current_user.is_admin:
            order = order_service.get_order_by_id(order_id)
        else:
            order = order_service.get_owned_order(order_id, current_user.id)
        return format_order(order), 200

    @role_required(Role.USER)
    @store_ns.doc(security='BearerAuth')
    def delete(self, order_id):
        """Cancel one of the caller's orders"""
        order_service.get_owned_order(order_id, current_user.id)
        order = order_service.cancel_order(order_id, current_user.id)
        return format_order(order), 200


@store_ns.route('/order/<int:order_id>/pay')
class OrderPayment(Resource):
    @role_required(Role.USER)
    @store_ns.expect(payment_model)
    @store_ns.doc(security='BearerAuth')
    def post(self, order_id):
        order_service.get_owned_order(order_id, current_user.id)
        payment_request = PaymentRequest.from_dict(request.get_json(silent=True))
        order = order_service.make_payment(order_id, payment_request)
        return format_order(order), 200


@store_ns.route('/order/<int:order_id>/delete')
class OrderDeletion(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @store_ns.doc(security='BearerAuth')
    def delete(self, order_id):
        if not current_user.is_admin:
            order_service.get_owned_order(order_id, current_user.id)
        order = order_service.delete_order(order_id, current_user.id)
        return format_order(order), 200


@store_ns.route('/order/<int:order_id>/delivery-status')
class OrderDeliveryStatus(Resource):
    @role_required(Role.ADMIN)
    @store_ns.expect(delivery_model)
    @store_ns.doc(security='BearerAuth')
    def patch(self, order_id):
        data = request.get_json(silent=True) or {}
        if not data.get('status'):
            raise ValidationException('Delivery status is required')
        order = order_service.update_order_delivery_status(
            order_id, data['status'], data.get('date'), current_user.id)
        return format_order(order), 200
