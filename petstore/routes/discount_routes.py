from flask import request
from flask_restx import Namespace, Resource, fields, reqparse

from petstore.models import Role
from petstore.services import discount_service
from petstore.services.discount_service import format_discount
from petstore.utils.util import role_required

discount_ns = Namespace('discounts', description='Discount codes', path='/api/discounts')

discount_model = discount_ns.model('Discount', {
    'code': fields.String(required=True, description='Unique code, at most 20 characters'),
    'percentage': fields.Float(required=True, description='Greater than 0 and at most 100'),
    'validFrom': fields.DateTime(required=True, dt_format='iso8601'),
    'validTo': fields.DateTime(required=True, dt_format='iso8601'),
    'description': fields.String(),
    'active': fields.Boolean(default=True),
})

code_parser = reqparse.RequestParser()
code_parser.add_argument('code', type=str, required=True, location='args', help='Discount code')


@discount_ns.route('')
class DiscountList(Resource):
    @role_required(Role.ADMIN)
    @discount_ns.doc(security='BearerAuth')
    def get(self):
        return [format_discount(d) for d in discount_service.get_all_discounts()], 200

    @role_required(Role.ADMIN)
    @discount_ns.expect(discount_model)
    @discount_ns.doc(security='BearerAuth')
    def post(self):
        discount = discount_service.save_discount(request.get_json(silent=True))
        return format_discount(discount), 201


@discount_ns.route('/<int:discount_id>')
class DiscountResource(Resource):
    @role_required(Role.ADMIN)
    @discount_ns.doc(security='BearerAuth')
    def get(self, discount_id):
        return format_discount(discount_service.get_discount_by_id(discount_id)), 200

    @role_required(Role.ADMIN)
    @discount_ns.expect(discount_model)
    @discount_ns.doc(security='BearerAuth')
    def put(self, discount_id):
        discount = discount_service.update_discount(discount_id, request.get_json(silent=True))
        return format_discount(discount), 200

    @role_required(Role.ADMIN)
    @discount_ns.doc(security='BearerAuth')
    def delete(self, discount_id):
        discount_service.delete_discount(discount_id)
        return {'message': 'Discount deleted successfully'}, 200


@discount_ns.route('/validate')
class DiscountValidation(Resource):
    @discount_ns.expect(code_parser)
    def get(self):
        """Check that a code is active and inside its validity window"""
        args = code_parser.parse_args()
        return format_discount(discount_service.validate_discount(args['code'])), 200


@discount_ns.route('/active')
class ActiveDiscounts(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @discount_ns.doc(security='BearerAuth')
    def get(self):
        return [format_discount(d) for d in discount_service.get_all_active_discounts()], 200
