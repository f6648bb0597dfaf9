"""
Custom exceptions for the application
"""

class BaseAppException(Exception):
    """Base application exception"""
    status_code = 500

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(BaseAppException):
    """Raised when validation fails"""
    status_code = 400


class AuthenticationError(BaseAppException):
    """Raised when authentication fails"""
    status_code = 401


class ConflictError(BaseAppException):
    """Raised when a unique resource already exists"""
    status_code = 409


class RateLimitError(BaseAppException):
    """Raised when a client exceeds its request allowance"""
    status_code = 429


class InfrastructureError(BaseAppException):
    """Raised when the store is unreachable or an operation times out.

    The message is safe to show to clients; the cause goes in ``details``
    and the logs only.
    """
    status_code = 503

    def __init__(self, message: str = "Service temporarily unavailable, please try again later", details: str = None):
        super().__init__(message, details)
