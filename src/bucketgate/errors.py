from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when a request carries no valid session."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when a username/password pair matches no configured credential."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class StorageError(UserError):
    """Base class for failures reported by the content store."""


class WriteFailedError(StorageError):
    def __init__(self, message: str = "Upload failed") -> None:
        super().__init__(message)


class ListFailedError(StorageError):
    def __init__(self, message: str = "Failed to list files") -> None:
        super().__init__(message)


class DeleteFailedError(StorageError):
    def __init__(self, message: str = "Delete failed") -> None:
        super().__init__(message)


class ObjectNotFoundError(StorageError, NotFoundError):
    def __init__(self, message: str = "File not found") -> None:
        super().__init__(message)


class ConfigurationError(Exception):
    """Raised when startup configuration is missing or malformed.

    Not a UserError: it aborts startup instead of producing a response.
    """
