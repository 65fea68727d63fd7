"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class AccessDenied(AppError):
    """Raised when a user may not act on a resource."""

    def __init__(self, message="You do not have permission to do that."):
        """Initialize the error."""
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class StorageError(AppError):
    """Raised when the document store fails to read or write."""

    def __init__(self, message="The data store is unavailable. Please try again."):
        """Initialize the error."""
        super().__init__(message, 503)


class ConflictError(AppError):
    """Raised when a resource already exists."""

    def __init__(self, message="That already exists."):
        """Initialize the error."""
        super().__init__(message, 409)
