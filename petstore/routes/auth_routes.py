import logging

from flask import request
from flask_restx import Namespace, Resource, fields

from petstore.services import user_service

logger = logging.getLogger(__name__)

auth_ns = Namespace('auth', description='Authentication operations', path='/api/auth')

register_model = auth_ns.model('Register', {
    'email': fields.String(required=True, description='Email address'),
    'password': fields.String(required=True, description='At least 6 characters with a letter and a digit'),
    'firstName': fields.String(required=True),
    'lastName': fields.String(required=True),
})

login_model = auth_ns.model('Login', {
    'email': fields.String(required=True),
    'password': fields.String(required=True),
})


def token_response(user):
    return {
        'token': user_service.create_token(user),
        'type': 'Bearer',
        'user': user_service.format_user(user),
    }


@auth_ns.route('/register')
class Register(Resource):
    @auth_ns.expect(register_model)
    def post(self):
        """Register a new user with the USER role"""
        user = user_service.register_user(request.get_json(silent=True))
        return token_response(user), 201


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    def post(self):
        """Exchange credentials for a bearer token"""
        data = request.get_json(silent=True) or {}
        user = user_service.authenticate(data.get('email'), data.get('password'))
        logger.info(f"User {user.email} logged in")
        return token_response(user), 200
