"""
Photo Feed Service Constants
"""


class HTTPConstants:
    """HTTP status codes and headers"""

    # Status codes
    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    CONFLICT = 409
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502

    # Headers
    CONTENT_TYPE = 'Content-Type'
    ACCESS_CONTROL_ALLOW_ORIGIN = 'Access-Control-Allow-Origin'
    ACCESS_CONTROL_ALLOW_HEADERS = 'Access-Control-Allow-Headers'
    ACCESS_CONTROL_ALLOW_METHODS = 'Access-Control-Allow-Methods'
    VARY = 'Vary'

    # MIME types
    JSON = 'application/json'


class FeedConstants:
    """Feed and photo record constants"""

    # Every photo lives in one feed partition so the GSI gives a global order
    FEED_PARTITION = 'photos'

    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 50

    # Index names
    FEED_INDEX = 'feed-index'
    USER_PHOTOS_INDEX = 'user-photos-index'

    # Blob keys
    UPLOAD_PREFIX = 'uploads'


class IdentityConstants:
    """Client-side identity token format"""

    USER_ID_PREFIX = 'user_'
    USER_ID_RANDOM_LENGTH = 9
    USER_ID_ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyz'

    # Fallback display name is "User" + last characters of the id
    DEFAULT_USERNAME_PREFIX = 'User'
    DEFAULT_USERNAME_SUFFIX_LENGTH = 4

    MAX_USERNAME_LENGTH = 50
    MAX_USER_ID_LENGTH = 128


class ErrorCodes:
    """Error codes exposed in failure responses"""

    VALIDATION_ERROR = 'VALIDATION_ERROR'
    NOT_FOUND = 'NOT_FOUND'
    UNAUTHORIZED = 'UNAUTHORIZED'
    STORE_ERROR = 'STORE_ERROR'
    THROTTLED = 'THROTTLED'
    CONCURRENT_UPDATE = 'CONCURRENT_UPDATE'
    BLOB_STORE_ERROR = 'BLOB_STORE_ERROR'
    METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
    INTERNAL_ERROR = 'INTERNAL_ERROR'

    STATUS_CODES = {
        VALIDATION_ERROR: HTTPConstants.BAD_REQUEST,
        NOT_FOUND: HTTPConstants.NOT_FOUND,
        UNAUTHORIZED: HTTPConstants.FORBIDDEN,
        STORE_ERROR: HTTPConstants.INTERNAL_SERVER_ERROR,
        THROTTLED: HTTPConstants.TOO_MANY_REQUESTS,
        CONCURRENT_UPDATE: HTTPConstants.CONFLICT,
        BLOB_STORE_ERROR: HTTPConstants.BAD_GATEWAY,
        METHOD_NOT_ALLOWED: HTTPConstants.METHOD_NOT_ALLOWED,
        INTERNAL_ERROR: HTTPConstants.INTERNAL_SERVER_ERROR,
    }

    @classmethod
    def status_for(cls, error_code: str) -> int:
        return cls.STATUS_CODES.get(error_code, HTTPConstants.INTERNAL_SERVER_ERROR)
