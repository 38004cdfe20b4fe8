"""
Photo Feed Service Exceptions
Custom exception classes for feed, like, delete and profile operations
"""


class PhotoStreamError(Exception):
    """Base exception for all photo feed service errors"""

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses"""
        result = {
            'code': self.error_code or 'INTERNAL_ERROR',
            'message': self.message
        }
        if self.details:
            result['details'] = self.details
        return result


class ValidationError(PhotoStreamError):
    """Raised when input validation fails"""

    def __init__(self, message: str, field: str = None, value: str = None):
        self.field = field
        self.value = value

        details = {}
        if field:
            details['field'] = field
        if value:
            details['value'] = value

        super().__init__(message, 'VALIDATION_ERROR', details)


class EntityNotFoundError(PhotoStreamError):
    """Raised when an entity is not found"""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id

        message = f"{entity_type.capitalize()} '{entity_id}' not found"
        details = {
            'entity_type': entity_type,
            'entity_id': entity_id
        }

        super().__init__(message, 'NOT_FOUND', details)


class PhotoNotFoundError(EntityNotFoundError):
    """Raised when the referenced photo does not exist (or was deleted)"""

    def __init__(self, photo_id: str):
        super().__init__('photo', photo_id)


class UserNotFoundError(EntityNotFoundError):
    """Raised when a user profile does not exist"""

    def __init__(self, user_id: str):
        super().__init__('user', user_id)


class UnauthorizedError(PhotoStreamError):
    """Raised when a caller mutates a photo it does not own"""

    def __init__(self, message: str = "Unauthorized", resource: str = None, action: str = None):
        self.resource = resource
        self.action = action

        details = {}
        if resource:
            details['resource'] = resource
        if action:
            details['action'] = action

        super().__init__(message, 'UNAUTHORIZED', details)


class StoreError(PhotoStreamError):
    """Raised when DynamoDB operations fail"""

    def __init__(self, message: str, operation: str = None, table: str = None,
                 original_error: str = None, error_code: str = 'STORE_ERROR',
                 retryable: bool = False, aws_error_code: str = None):
        self.operation = operation
        self.table = table
        self.original_error = original_error
        self.retryable = retryable
        self.aws_error_code = aws_error_code

        details = {'retryable': retryable}
        if operation:
            details['operation'] = operation
        if table:
            details['table'] = table
        if aws_error_code:
            details['aws_error_code'] = aws_error_code

        super().__init__(message, error_code, details)


class ConcurrentUpdateError(StoreError):
    """Raised when an optimistic update keeps losing the race for a record"""

    def __init__(self, message: str, operation: str = None, table: str = None, attempts: int = None):
        self.attempts = attempts
        super().__init__(
            message,
            operation=operation,
            table=table,
            error_code='CONCURRENT_UPDATE',
            retryable=True
        )
        if attempts:
            self.details['attempts'] = attempts


class BlobStoreError(PhotoStreamError):
    """Raised when S3 operations fail"""

    def __init__(self, message: str, operation: str = None, bucket: str = None, key: str = None,
                 retryable: bool = False, aws_error_code: str = None):
        self.operation = operation
        self.bucket = bucket
        self.key = key
        self.retryable = retryable
        self.aws_error_code = aws_error_code

        details = {'retryable': retryable}
        if operation:
            details['operation'] = operation
        if bucket:
            details['bucket'] = bucket
        if key:
            details['key'] = key
        if aws_error_code:
            details['aws_error_code'] = aws_error_code

        super().__init__(message, 'BLOB_STORE_ERROR', details)
