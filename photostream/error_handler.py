"""
AWS error handling utilities for the photo feed service
Translates botocore / PynamoDB failures into service exceptions
"""
from typing import Dict, Any, Optional
from botocore.exceptions import ClientError, BotoCoreError
from pynamodb.exceptions import PynamoDBException
from .constants import ErrorCodes
from .exceptions import PhotoStreamError, StoreError, BlobStoreError
from .logger import logger


THROTTLING_CODES = ('ThrottlingException', 'ProvisionedThroughputExceededException', 'RequestLimitExceeded')
S3_THROTTLING_CODES = ('SlowDown', 'RequestLimitExceeded')


def _aws_error_code(error: Exception) -> str:
    """Extract the AWS error code from a ClientError or a wrapped PynamoDB error"""
    if isinstance(error, ClientError):
        return error.response.get('Error', {}).get('Code', 'Unknown')
    if isinstance(error, PynamoDBException):
        return error.cause_response_code or 'Unknown'
    return None


class AWSErrorHandler:
    """
    Centralized AWS error handling for the photo feed service
    """

    @staticmethod
    def handle_dynamodb_error(error: Exception, operation: str, table_name: str = None) -> StoreError:
        """
        Classify a DynamoDB failure

        Args:
            error: The exception that occurred
            operation: The operation being performed
            table_name: Optional table name for context

        Returns:
            StoreError ready to be raised by the caller
        """
        if isinstance(error, StoreError):
            return error

        aws_error_code = _aws_error_code(error)
        error_context = {
            'operation': operation,
            'table_name': table_name or 'unknown',
            'error_type': type(error).__name__,
            'aws_error_code': aws_error_code
        }

        logger.error(f"DynamoDB operation failed: {operation}", error=error, **error_context)

        if aws_error_code in THROTTLING_CODES:
            return StoreError(
                'Database is temporarily busy. Please try again.',
                operation=operation,
                table=table_name,
                original_error=str(error),
                error_code=ErrorCodes.THROTTLED,
                retryable=True,
                aws_error_code=aws_error_code
            )

        if isinstance(error, (PynamoDBException, ClientError, BotoCoreError)):
            return StoreError(
                f'Database operation failed: {operation}',
                operation=operation,
                table=table_name,
                original_error=str(error),
                retryable=True,
                aws_error_code=aws_error_code
            )

        return StoreError(
            'Unexpected database error occurred',
            operation=operation,
            table=table_name,
            original_error=str(error)
        )

    @staticmethod
    def handle_s3_error(error: Exception, operation: str, bucket_name: str = None, key: str = None) -> BlobStoreError:
        """
        Classify an S3 failure

        Args:
            error: The exception that occurred
            operation: The operation being performed
            bucket_name: Optional bucket name for context
            key: Optional S3 key for context

        Returns:
            BlobStoreError ready to be raised by the caller
        """
        if isinstance(error, BlobStoreError):
            return error

        aws_error_code = _aws_error_code(error)
        logger.error(
            "S3 operation failed",
            error=error,
            operation=operation,
            bucket_name=bucket_name or 'unknown',
            s3_key=key or 'unknown',
            aws_error_code=aws_error_code
        )

        if aws_error_code == 'NoSuchBucket':
            message = 'Storage bucket not found'
        elif aws_error_code == 'AccessDenied':
            message = 'Access denied to storage resource'
        elif aws_error_code in S3_THROTTLING_CODES:
            message = 'Storage service is busy. Please try again.'
        else:
            message = f'Storage error during {operation}'

        return BlobStoreError(
            message,
            operation=operation,
            bucket=bucket_name,
            key=key,
            retryable=aws_error_code in S3_THROTTLING_CODES,
            aws_error_code=aws_error_code
        )

    @staticmethod
    def client_details(error: PhotoStreamError) -> Optional[Dict[str, Any]]:
        """
        Error details safe to return to callers

        Store and blob failures carry table, bucket, key and AWS codes; those
        stay in the logs and only the retryable flag is returned.
        """
        if isinstance(error, (StoreError, BlobStoreError)):
            return {'retryable': error.retryable}
        return error.details or None

    @classmethod
    def describe(cls, error: PhotoStreamError) -> Dict[str, Any]:
        """
        Map a service exception to the status code and failure body used by handlers

        Args:
            error: Service exception

        Returns:
            Dict with 'status_code' and 'error' entries
        """
        body = {
            'code': error.error_code or ErrorCodes.INTERNAL_ERROR,
            'message': error.message
        }
        details = cls.client_details(error)
        if details:
            body['details'] = details

        return {
            'status_code': ErrorCodes.status_for(error.error_code),
            'error': body
        }


# Global error handler instance
error_handler = AWSErrorHandler()
