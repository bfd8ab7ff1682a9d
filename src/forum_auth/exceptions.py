"""Authentication exceptions and error codes.

These exceptions are raised by the forum_auth package and form its public
error taxonomy. The presentation layer maps ``AuthError.code`` onto
transport status codes; nothing outside this module should need to know
about storage or codec failures.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    INVALID_USERNAME = "INVALID_USERNAME"
    INVALID_PASSWORD = "INVALID_PASSWORD"

    # Authentication Errors (401)
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Not Found Errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Conflict Errors (409)
    USER_EXISTS = "USER_EXISTS"

    # General Errors
    UNIMPLEMENTED = "UNIMPLEMENTED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AuthError(Exception):
    """Base exception for all authentication errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    """

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r})"
        )


class InvalidUsernameError(AuthError):
    """Raised when a username does not match the required format."""

    code = ErrorCode.INVALID_USERNAME

    def __init__(self, message: str = "Invalid username format"):
        super().__init__(message)


class InvalidPasswordError(AuthError):
    """Raised when a password doesn't meet length requirements."""

    code = ErrorCode.INVALID_PASSWORD

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class UserAlreadyExistsError(AuthError):
    """Username already registered."""

    code = ErrorCode.USER_EXISTS

    def __init__(self, username: str):
        self.username = username
        super().__init__("User already exists")


class InvalidCredentialsError(AuthError):
    """Raised when username or password is incorrect during login.

    Unknown users and wrong passwords deliberately share this error.
    """

    code = ErrorCode.INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class UserNotFoundError(AuthError):
    """User not found (profile lookups only)."""

    code = ErrorCode.USER_NOT_FOUND

    def __init__(self, user_id: int | str):
        self.user_id = user_id
        super().__init__("User not found")


class InvalidTokenError(AuthError):
    """Raised when a token is invalid, expired, revoked, or malformed."""

    code = ErrorCode.INVALID_TOKEN

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class UnimplementedError(AuthError):
    """Raised by operations that exist in the contract but are disabled."""

    code = ErrorCode.UNIMPLEMENTED

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} is not implemented")


class InternalError(AuthError):
    """Opaque wrapper for unexpected storage or codec failures.

    The original exception is kept as ``__cause__`` for logging only.
    """

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


class CredentialStoreError(Exception):
    """Raised by store implementations for any non-domain storage failure.

    Never crosses the AuthenticationService boundary; it is wrapped
    as InternalError there.
    """

    def __init__(self, operation: str, message: str = "Credential store failure"):
        self.operation = operation
        super().__init__(f"{message} during {operation}")
