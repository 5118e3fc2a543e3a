"""
Application Error Taxonomy

Use cases raise these; the API layer maps each class to an HTTP status
and a uniform error envelope.
"""


class AppError(Exception):
    """Base application error carrying a machine-readable code"""

    default_code = "APP_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)


class Unauthorized(AppError):
    """Missing or invalid credentials, invalid session, wrong auth method"""

    default_code = "UNAUTHORIZED"


class Conflict(AppError):
    """Duplicate resource creation"""

    default_code = "CONFLICT"


class ValidationError(AppError):
    """Malformed input or business-rule violation"""

    default_code = "VALIDATION_ERROR"


class NotFound(AppError):
    """Referenced entity missing or inactive for the caller"""

    default_code = "NOT_FOUND"


class InternalError(AppError):
    """Persistence, hashing, signing or transaction failure"""

    default_code = "INTERNAL_ERROR"


class HashingError(InternalError):
    default_code = "HASHING_ERROR"


class ConfigurationError(Exception):
    """Missing or unreadable configuration; fatal at process start"""
