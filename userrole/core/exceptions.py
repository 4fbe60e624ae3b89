"""Custom exceptions for the application."""


class BaseAPIException(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = None,
        details: dict = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseAPIException):
    """Malformed, missing or duplicate input."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict = None,
        status_code: int = 422,
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
            details=details
        )


class MissingParametersError(ValidationError):
    """Required request parameters were not supplied."""

    def __init__(self, message: str = "Missing parameters", details: dict = None):
        super().__init__(
            message=message,
            details=details,
            status_code=401,
            error_code="MISSING_PARAMETERS",
        )


class AuthenticationError(BaseAPIException):
    """Authentication error."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict = None,
        status_code: int = 401,
        error_code: str = "AUTHENTICATION_ERROR",
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
            details=details
        )


class InvalidTokenError(AuthenticationError):
    """Bearer token is malformed, badly signed or expired."""

    def __init__(self, message: str = "Invalid or expired token", details: dict = None):
        super().__init__(
            message=message,
            details=details,
            error_code="INVALID_TOKEN",
        )


class InvalidCredentialsError(AuthenticationError):
    """User name or password did not match."""

    def __init__(self, message: str = "Unable to login", details: dict = None):
        super().__init__(
            message=message,
            details=details,
            status_code=403,
            error_code="INVALID_CREDENTIALS",
        )


class AuthorizationError(BaseAPIException):
    """Authorization error."""

    def __init__(self, message: str = "Insufficient permissions", details: dict = None):
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details
        )


class NotFoundError(BaseAPIException):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found", details: dict = None):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND_ERROR",
            details=details
        )


class PersistenceError(BaseAPIException):
    """Storage unavailable or timed out. Safe for the caller to retry."""

    def __init__(self, message: str = "Storage operation failed", details: dict = None):
        super().__init__(
            message=message,
            status_code=503,
            error_code="PERSISTENCE_ERROR",
            details=details
        )
