from flask import request
from flask_jwt_extended import current_user
from flask_restx import Namespace, Resource, fields

from petstore.exceptions import AccessDeniedException
from petstore.models import Role
from petstore.services import user_service
from petstore.services.user_service import format_user
from petstore.utils.util import role_required

users_ns = Namespace('users', description='User management', path='/api/users')

user_update_model = users_ns.model('UserUpdate', {
    'email': fields.String(),
    'password': fields.String(),
    'firstName': fields.String(),
    'lastName': fields.String(),
    'roles': fields.List(fields.String(enum=['USER', 'ADMIN']), description='Administrators only'),
})


def ensure_self_or_admin(user_id):
    if not current_user.is_admin and current_user.id != user_id:
        raise AccessDeniedException('You can only access your own account')


@users_ns.route('')
class UserList(Resource):
    @role_required(Role.ADMIN)
    @users_ns.doc(security='BearerAuth')
    def get(self):
        return [format_user(u) for u in user_service.get_all_users()], 200


@users_ns.route('/<int:user_id>')
class UserResource(Resource):
    @role_required(Role.USER, Role.ADMIN)
    @users_ns.doc(security='BearerAuth')
    def get(self, user_id):
        ensure_self_or_admin(user_id)
        return format_user(user_service.get_user_by_id(user_id)), 200

    @role_required(Role.USER, Role.ADMIN)
    @users_ns.expect(user_update_model)
    @users_ns.doc(security='BearerAuth')
    def put(self, user_id):
        ensure_self_or_admin(user_id)
        user = user_service.update_user(user_id, request.get_json(silent=True),
                                        allow_role_change=current_user.is_admin)
        return format_user(user), 200

    @role_required(Role.ADMIN)
    @users_ns.doc(security='BearerAuth')
    def delete(self, user_id):
        """Delete a user that owns, created and ordered nothing"""
        user_service.delete_user(user_id)
        return {'message': 'User deleted successfully'}, 200
