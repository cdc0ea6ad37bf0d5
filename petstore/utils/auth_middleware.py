import logging

from flask import request

from petstore import db, jwt
from petstore.models.user_model import User

logger = logging.getLogger(__name__)


def setup_auth_middleware(app):
    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        # tokens of deleted users resolve to None and are rejected with 401
        try:
            user_id = int(jwt_data['sub'])
        except (KeyError, TypeError, ValueError):
            return None
        return db.session.get(User, user_id)

    @app.before_request
    def before_request():
        logger.debug(f"{request.method} {request.path}")
        return None
