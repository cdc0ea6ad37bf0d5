import logging

from flask import request
from flask_jwt_extended import current_user, verify_jwt_in_request
from flask_restx import Namespace, Resource, fields, inputs, reqparse

from petstore.models import Role
from petstore.services import pet_service
from petstore.services.pet_service import format_pet
from petstore.utils.util import role_required

logger = logging.getLogger(__name__)

pet_ns = Namespace('pets', description='Pet operations', path='/api/pets')

pet_model = pet_ns.model('Pet', {
    'name': fields.String(required=True),
    'description': fields.String(),
    'price': fields.Float(required=True),
    'status': fields.String(enum=['AVAILABLE', 'PENDING', 'SOLD']),
    'categoryId': fields.Integer(),
    'ownerId': fields.Integer(description='Only administrators may set the owner'),
    'photoUrls': fields.List(fields.String),
    'tags': fields.List(fields.String),
})

filter_parser = reqparse.RequestParser()
filter_parser.add_argument('name', type=str, location='args', help='Case-insensitive name fragment')
filter_parser.add_argument('categoryId', type=int, location='args', help='Category ID')
filter_parser.add_argument('status', type=str, location='args', help='AVAILABLE, PENDING or SOLD')
filter_parser.add_argument('limit', type=int, location='args', help='Maximum number of pets')

search_parser = filter_parser.copy()
search_parser.remove_argument('limit')
search_parser.add_argument('page', type=int, default=0, location='args', help='Zero-based page index')
search_parser.add_argument('size', type=int, default=10, location='args', help='Page size')
search_parser.add_argument('mine', type=inputs.boolean, default=False, location='args',
                           help='Only pets owned or created by the caller (requires a token)')

latest_parser = reqparse.RequestParser()
latest_parser.add_argument('limit', type=int, default=pet_service.LATEST_PETS_LIMIT, location='args')

status_parser = reqparse.RequestParser()
status_parser.add_argument('status', type=str, required=True, location='args',
                           help='Pet status (AVAILABLE, PENDING, SOLD)')


@pet_ns.route('')
class PetList(Resource):
    @pet_ns.expect(filter_parser)
    def get(self):
        args = filter_parser.parse_args()
        pets = pet_service.find_pets(args['name'], args['categoryId'], args['status'], args['limit'])
        logger.debug(f"Retrieved {len(pets)} pets")
        return [format_pet(p) for p in pets], 200

    @role_required(Role.USER, Role.ADMIN)
    @pet_ns.expect(pet_model)
    @pet_ns.doc('create_pet', security='BearerAuth')
    def post(self):
        pet = pet_service.save_pet(request.get_json(silent=True), current_user)
        return format_pet(pet), 201


@pet_ns.route('/latest')
class LatestPets(Resource):
    @pet_ns.expect(latest_parser)
    def get(self):
        """Newest available pets"""
        args = latest_parser.parse_args()
        return [format_pet(p) for p in pet_service.get_latest_available_pets(args['limit'])], 200


@pet_ns.route('/search')
class PetSearch(Resource):
    @pet_ns.expect(search_parser)
    def get(self):
        args = search_parser.parse_args()
        user_id = None
        if args['mine']:
            verify_jwt_in_request()
            user_id = current_user.id
        return pet_service.find_pets_paginated(
            args['name'], args['categoryId'], args['status'], user_id, args['page'], args['size']), 200


@pet_ns.route('/findByStatus')
class PetsByStatus(Resource):
    @pet_ns.expect(status_parser)
    def get(self):
        args = status_parser.parse_args()
        return [format_pet(p) for p in pet_service.get_pets_by_status(args['status'])], 200


@pet_ns.route('/my-pets')
class MyPets(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @pet_ns.doc(security='BearerAuth')
    def get(self):
        """Pets the caller owns or created"""
        return [format_pet(p) for p in pet_service.get_pets_for_user(current_user)], 200


@pet_ns.route('/<int:pet_id>')
class PetResource(Resource):
    def get(self, pet_id):
        return format_pet(pet_service.get_pet_by_id(pet_id)), 200

    @role_required(Role.USER, Role.ADMIN)
    @pet_ns.expect(pet_model)
    @pet_ns.doc('update_pet', security='BearerAuth')
    def put(self, pet_id):
        """Update a pet; administrators or the pet's creator only"""
        pet = pet_service.update_pet(pet_id, request.get_json(silent=True), current_user)
        return format_pet(pet), 200

    @role_required(Role.ADMIN)
    @pet_ns.doc('delete_pet', security='BearerAuth')
    def delete(self, pet_id):
        pet_service.delete_pet(pet_id)
        return {'message': 'Pet deleted successfully'}, 200


@pet_ns.route('/<int:pet_id>/status')
class PetStatusResource(Resource):
    @role_required(Role.ADMIN)
    @pet_ns.expect(status_parser)
    @pet_ns.doc(security='BearerAuth')
    def post(self, pet_id):
        args = status_parser.parse_args()
        pet = pet_service.update_pet_status(pet_id, args['status'], current_user.id)
        return format_pet(pet), 200


@pet_ns.route('/<int:pet_id>/purchase')
class PetPurchase(Resource):
    @role_required(Role.USER)
    @pet_ns.doc(security='BearerAuth')
    def post(self, pet_id):
        """Buy an available pet directly, without the cart"""
        pet = pet_service.purchase_pet(pet_id, current_user)
        return format_pet(pet), 200
