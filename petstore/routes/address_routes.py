from flask import request
from flask_jwt_extended import current_user
from flask_restx import Namespace, Resource, fields

from petstore.models import Role
from petstore.services import address_service
from petstore.services.address_service import format_address
from petstore.utils.util import role_required

address_ns = Namespace('addresses', description="The caller's addresses", path='/api/users/addresses')

address_model = address_ns.model('Address', {
    'fullName': fields.String(required=True),
    'phoneNumber': fields.String(required=True),
    'street': fields.String(required=True),
    'city': fields.String(required=True),
    'state': fields.String(required=True),
    'postalCode': fields.String(required=True),
    'country': fields.String(required=True),
    'isDefault': fields.Boolean(default=False),
})


@address_ns.route('')
class AddressList(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @address_ns.doc(security='BearerAuth')
    def get(self):
        return [format_address(a) for a in address_service.get_user_addresses(current_user.id)], 200

    @role_required(Role.USER, Role.ADMIN)
    @address_ns.expect(address_model)
    @address_ns.doc(security='BearerAuth')
    def post(self):
        """Add an address; a user's first address becomes the default"""
        address = address_service.create_address(current_user.id, request.get_json(silent=True))
        return format_address(address), 201


@address_ns.route('/<int:address_id>')
class AddressResource(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @address_ns.expect(address_model)
    @address_ns.doc(security='BearerAuth')
    def put(self, address_id):
        address = address_service.update_address(current_user.id, address_id, request.get_json(silent=True))
        return format_address(address), 200

    @role_required(Role.USER, Role.ADMIN)
    @address_ns.doc(security='BearerAuth')
    def delete(self, address_id):
        address_service.delete_address(current_user.id, address_id)
        return {'message': 'Address deleted successfully'}, 200
