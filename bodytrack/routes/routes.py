import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from ..extensions import jwt

logger = logging.getLogger(__name__)


def register_routes(app):

    @app.route('/')
    def home():
        return 'API is running...'

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception('Unhandled error: %s', error)
        return jsonify({'error': 'Server Error'}), 500


@jwt.unauthorized_loader
def missing_token(reason):
    return jsonify({'error': 'No token, authorization denied'}), 401


@jwt.invalid_token_loader
def invalid_token(reason):
    return jsonify({'error': 'Token is not valid'}), 401


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_payload):
    return jsonify({'error': 'Token has expired'}), 401
