"""Custom exceptions for the point-of-sale application."""

class PosError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['error'] = self.message
        rv['status'] = 'error'
        return rv

class ValidationError(PosError):
    """Raised when a request is missing data or carries invalid values."""
    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)

class NotFoundError(PosError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)

class PersistenceError(PosError):
    """Raised when a database operation fails."""
    def __init__(self, message="Database error", payload=None):
        super().__init__(message, 500, payload)
