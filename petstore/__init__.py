import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_restx import Api
from petstore.config import Config

migrate = Migrate()
db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()

api = Api(
    title='Pet Store API',
    version='1.0',
    description='Pets, carts, orders, payments and deliveries',
    doc='/docs',
    ui_config={
        'displayOperationId': True,
        'docExpansion': 'none',
        'filter': True,
        'defaultModelsExpandDepth': 1,
        'defaultModelExpandDepth': 1
    },
    security=[{'BearerAuth': []}],  # Define JWT security
    authorizations={
        'BearerAuth': {
            'type': 'apiKey',
            'in': 'header',
            'name': 'Authorization',
            'description': 'Enter your JWT token as "Bearer <token>"'
        }
    }
)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)
    api.init_app(app)

    # Enable CORS
    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]))

    from .utils.order_numbers import get_order_number_generator
    app.extensions['order_number_generator'] = get_order_number_generator(
        app.config.get('ORDER_NUMBER_GENERATOR', 'uuid'))

    # JWT user loading and request logging
    from .utils.auth_middleware import setup_auth_middleware
    setup_auth_middleware(app)

    from .utils.error_handlers import register_error_handlers
    register_error_handlers(api)

    # Register API namespaces
    from .routes.auth_routes import auth_ns
    from .routes.pet_routes import pet_ns
    from .routes.category_routes import category_ns
    from .routes.discount_routes import discount_ns
    from .routes.users_routes import users_ns
    from .routes.address_routes import address_ns
    from .routes.store_routes import store_ns

    # Add namespaces to the API
    api.add_namespace(auth_ns)
    api.add_namespace(pet_ns)
    api.add_namespace(category_ns)
    api.add_namespace(discount_ns)
    api.add_namespace(address_ns)
    api.add_namespace(users_ns)
    api.add_namespace(store_ns)

    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()  # Create all tables

    return app
