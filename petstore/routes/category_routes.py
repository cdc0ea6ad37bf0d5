from flask import request
from flask_restx import Namespace, Resource, fields

from petstore.models import Role
from petstore.services import category_service
from petstore.services.category_service import format_category
from petstore.utils.util import role_required

category_ns = Namespace('categories', description='Pet categories', path='/api/categories')

category_model = category_ns.model('Category', {
    'name': fields.String(required=True, description='Unique category name'),
})


@category_ns.route('')
class CategoryList(Resource):
    def get(self):
        return [format_category(c) for c in category_service.get_all_categories()], 200

    @role_required(Role.ADMIN)
    @category_ns.expect(category_model)
    @category_ns.doc(security='BearerAuth')
    def post(self):
        category = category_service.save_category(request.get_json(silent=True))
        return format_category(category), 201


@category_ns.route('/<int:category_id>')
class CategoryResource(Resource):
    def get(self, category_id):
        return format_category(category_service.get_category_by_id(category_id)), 200

    @role_required(Role.ADMIN)
    @category_ns.expect(category_model)
    @category_ns.doc(security='BearerAuth')
    def put(self, category_id):
        category = category_service.update_category(category_id, request.get_json(silent=True))
        return format_category(category), 200

    @role_required(Role.ADMIN)
    @category_ns.doc(security='BearerAuth')
    def delete(self, category_id):
        """Delete a category that no pet uses"""
        category_service.delete_category(category_id)
        return {'message': 'Category deleted successfully'}, 200
