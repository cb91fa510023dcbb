# eventboard/errors.py
from flask import jsonify
from eventboard.logging_config import setup_logging

logger = setup_logging()


class ApiError(Exception):
    """Base class for errors that map to a JSON response."""
    status_code = 500
    message = 'Internal server error.'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def name(self):
        return type(self).__name__

    def to_dict(self):
        return {'error': self.name, 'message': self.message}


class ValidationError(ApiError):
    status_code = 400
    message = 'Invalid request.'


class MissingField(ValidationError):
    message = 'Please fill out all required fields.'


class DuplicateUser(ValidationError):
    message = 'User already exists.'


class InvalidCredentials(ApiError):
    status_code = 401
    message = 'Please check your login details and try again.'


class NotAuthenticated(ApiError):
    status_code = 403
    message = 'You must be logged in to do that.'


class NotAuthorized(ApiError):
    status_code = 403
    message = 'Administrator privileges required.'


class NotFound(ApiError):
    status_code = 404
    message = 'Resource not found.'


class UserNotFound(NotFound):
    message = 'User not found.'


class InvalidOrExpiredToken(ApiError):
    status_code = 400
    message = 'Password reset token is invalid or has expired.'


class InternalError(ApiError):
    pass


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'NotFound', 'message': 'Resource not found.'}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({'error': 'MethodNotAllowed', 'message': 'Method not allowed.'}), 405

    # Last resort for anything a route did not handle itself
    @app.errorhandler(500)
    def handle_internal_error(error):
        original = getattr(error, 'original_exception', None)
        logger.error(f"Unhandled error: {original or error}")
        return jsonify(InternalError().to_dict()), 500
