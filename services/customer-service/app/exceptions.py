"""
Service Exceptions
Error taxonomy shared by the account and item services
"""

from typing import Optional

from fastapi import status


class AccountServiceError(Exception):
    """Base error; carries the HTTP status the boundary maps it to"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountServiceError):
    """Missing or malformed input"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AccountServiceError):
    """Username already taken"""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "username already exists"


class AuthenticationError(AccountServiceError):
    """Bad credentials; never says whether the user exists"""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "username or password is wrong"


class NotFoundError(AccountServiceError):
    """Referenced record is absent"""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StoreError(AccountServiceError):
    """Persistence layer failure"""


class DuplicateKeyError(StoreError):
    """The store rejected a write that would duplicate a unique key"""

    default_message = "Duplicate key"


class PayloadTooLargeError(ValidationError):
    """Uploaded file exceeds the configured limit"""

    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_message = "File too large"
