"""
Shared error handlers for Flask application and blueprints
"""

from flask import request

from roots_app.services.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    LoginCooldownError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from roots_app.shared.api_response_formatter import APIResponseFormatter
from roots_app.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

# Most specific first: handlers are picked along the exception's MRO
SERVICE_ERROR_STATUS = (
    (LoginCooldownError, 429),
    (AuthenticationError, 401),
    (ValidationError, 400),
    (InvalidTokenError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def service_error_status(error: ServiceError) -> int:
    for error_class, status_code in SERVICE_ERROR_STATUS:
        if isinstance(error, error_class):
            return status_code
    return 500


def register_error_handlers(app_or_blueprint):
    """Register error handlers for Flask app or blueprint"""

    @app_or_blueprint.errorhandler(ServiceError)
    def handle_service_error(error):
        """Handle recoverable service errors"""
        status_code = service_error_status(error)

        if status_code >= 500:
            logger.error(f"Service error: {request.method} {request.url} - {error}")
            return APIResponseFormatter.service_error(error, status_code, message='Internal server error')

        logger.warning(f"{status_code} {error.__class__.__name__}: {request.method} {request.url} - {error}")
        return APIResponseFormatter.service_error(error, status_code)

    @app_or_blueprint.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors"""
        logger.warning(f"404 error: {request.url}")
        return APIResponseFormatter.error('Resource not found', 404)

    @app_or_blueprint.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors"""
        logger.warning(f"405 error: {request.method} {request.url}")
        return APIResponseFormatter.error('Method not allowed', 405)

    @app_or_blueprint.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors"""
        logger.error(f"500 error: {request.url} - {str(error)}")
        return APIResponseFormatter.error('Internal server error', 500)
