"""
Custom exceptions for service layer
"""

import functools

import sqlalchemy.exc


class ServiceError(Exception):
    """Base exception for service layer errors"""
    pass

class ValidationError(ServiceError):
    """Raised when input validation fails"""
    pass

class InvalidIntervalError(ValidationError):
    """Raised when an interval ends before it starts"""
    pass

class SelfReferenceError(ValidationError):
    """Raised when a relationship edge points an Individual at itself"""
    pass

class MissingReferenceError(ValidationError):
    """Raised when a record references an Individual that does not exist"""
    pass

class NotFoundError(ServiceError):
    """Raised when a requested resource is not found"""
    pass

class ConflictError(ServiceError):
    """Raised when an operation conflicts with current state"""
    pass

class DuplicateCurrentNameError(ConflictError):
    """Raised when an Individual would hold two open-ended names"""
    pass

class DuplicateEmailError(ConflictError):
    """Raised when registering an email that already has an account"""
    pass

class AuthenticationError(ServiceError):
    """Raised when login credentials are rejected"""
    pass

class LoginCooldownError(AuthenticationError):
    """Raised when an account is locked after repeated failed logins"""

    def __init__(self, message: str = "", retry_after: int = 0):
        super().__init__(message)
        self.retry_after = retry_after


class InvalidTokenError(ServiceError):
    """Raised when a confirmation or reset token does not match"""
    pass

class ExpiredTokenError(InvalidTokenError):
    """Raised when a password reset token is past its lifetime"""
    pass

class DatabaseError(ServiceError):
    """Raised when database operations fail"""
    pass


def handle_service_exceptions(logger=None):
    """Decorator to handle common service exceptions and convert them to service-specific exceptions"""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ServiceError:
                # Re-raise our own errors untouched
                raise
            except sqlalchemy.exc.IntegrityError as e:
                if logger:
                    logger.error(f"Database integrity error in {func.__name__}: {e}")
                raise ConflictError(f"Data integrity violation: {e.orig}") from e
            except sqlalchemy.exc.OperationalError as e:
                if logger:
                    logger.error(f"Database operational error in {func.__name__}: {e}")
                raise DatabaseError(f"Database connection error: {e}") from e
            except sqlalchemy.exc.SQLAlchemyError as e:
                if logger:
                    logger.error(f"Database error in {func.__name__}: {e}")
                raise DatabaseError(f"Database error: {e}") from e
            except ValueError as e:
                if logger:
                    logger.error(f"Validation error in {func.__name__}: {e}")
                raise ValidationError(f"Invalid input: {e}") from e
            except KeyError as e:
                if logger:
                    logger.error(f"Missing required data in {func.__name__}: {e}")
                raise ValidationError(f"Missing required field: {e}") from e
            except Exception as e:
                if logger:
                    logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
                raise ServiceError(f"Unexpected service error: {e}") from e
        return wrapper
    return decorator
