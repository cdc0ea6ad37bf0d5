# Central translation of exceptions into the JSON error body
import logging
from datetime import datetime
from http import HTTPStatus

from flask import request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from werkzeug.exceptions import HTTPException

from petstore import db
from petstore.exceptions import ErrorCodes, PetStoreException

logger = logging.getLogger(__name__)


def error_response(status, message, code):
    try:
        error = HTTPStatus(status).phrase
    except ValueError:
        error = 'Error'
    return {
        'status': status,
        'error': error,
        'message': message,
        'path': request.path,
        'code': code,
        'timestamp': datetime.utcnow().strftime('%Y-%m-%dT%H:%M:%S'),
    }, status


def register_error_handlers(api):
    # flask-restx dispatches to the first matching handler in registration order

    @api.errorhandler(PetStoreException)
    def handle_pet_store_exception(error):
        db.session.rollback()
        logger.warning(f"{error.__class__.__name__}: {error.message}")
        return error_response(error.status_code, error.message, error.code)

    @api.errorhandler(JWTExtendedException)
    def handle_jwt_exception(error):
        logger.warning(f"Authentication failed: {error}")
        return error_response(401, str(error) or 'Authentication required', ErrorCodes.AUTHENTICATION_FAILED)

    @api.errorhandler(PyJWTError)
    def handle_invalid_token(error):
        logger.warning(f"Invalid token: {error}")
        return error_response(401, f'Invalid token: {error}', ErrorCodes.AUTHENTICATION_FAILED)

    @api.errorhandler(HTTPException)
    def handle_http_exception(error):
        message = error.description
        data = getattr(error, 'data', None)
        if isinstance(data, dict) and data.get('errors'):
            # reqparse / payload validation details
            message = '; '.join(f'{field}: {reason}' for field, reason in data['errors'].items())
        body, status = error_response(error.code, message, f'ERROR_{error.code}')
        if data is not None:
            # flask-restx renders error.data in place of the handler result
            error.data = body
        return body, status

    @api.errorhandler(Exception)
    def handle_unexpected_exception(error):
        db.session.rollback()
        logger.exception(f"Unexpected error: {error}")
        return error_response(500, 'An unexpected error occurred', ErrorCodes.INTERNAL_SERVER_ERROR)
