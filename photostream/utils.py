"""
AWS-specific utilities for the photo feed service
Lambda proxy responses and S3 blob store helpers
"""
import json
from datetime import datetime, timezone
from typing import Dict, Any, Optional
import boto3
from botocore.exceptions import ClientError, BotoCoreError
from .constants import HTTPConstants, ErrorCodes
from .config import config
from .error_handler import error_handler
from .logger import logger


def _request_origin(event: Optional[dict]) -> Optional[str]:
    """Origin header of the incoming request (header names are case-insensitive)"""
    headers = (event or {}).get('headers') or {}
    for name, value in headers.items():
        if name.lower() == 'origin':
            return value
    return None


def cors_headers(event: Optional[dict] = None) -> Dict[str, str]:
    """
    CORS headers for a response

    Access-Control-Allow-Origin carries a single origin or '*', so with an
    explicit allow list the request Origin is echoed back only when listed.
    """
    allowed_origins = config.cors_allowed_origins
    headers = {
        HTTPConstants.ACCESS_CONTROL_ALLOW_HEADERS: 'Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token',
        HTTPConstants.ACCESS_CONTROL_ALLOW_METHODS: 'GET,POST,PUT,DELETE,OPTIONS'
    }

    if '*' in allowed_origins:
        headers[HTTPConstants.ACCESS_CONTROL_ALLOW_ORIGIN] = '*'
        return headers

    origin = _request_origin(event)
    if origin and origin in allowed_origins:
        headers[HTTPConstants.ACCESS_CONTROL_ALLOW_ORIGIN] = origin
    headers[HTTPConstants.VARY] = 'Origin'
    return headers


def create_response(status_code: int, body: str, event: Optional[dict] = None, headers: Optional[dict] = None) -> Dict[str, Any]:
    """
    Create standardized Lambda proxy response

    Args:
        status_code: HTTP status code
        body: Response body (JSON string)
        event: Original Lambda event for context
        headers: Additional headers

    Returns:
        Lambda proxy integration response
    """
    default_headers = {HTTPConstants.CONTENT_TYPE: HTTPConstants.JSON}
    default_headers.update(cors_headers(event))

    if headers:
        default_headers.update(headers)

    return {
        'statusCode': status_code,
        'headers': default_headers,
        'body': body
    }


def create_success_response(data: Any, metadata: Optional[Dict[str, Any]] = None, function_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Create protocol-agnostic success payload

    Args:
        data: The actual response data
        metadata: Optional metadata dict
        function_name: Name of the function generating the response

    Returns:
        Success payload
    """
    response_metadata = {
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

    if function_name:
        response_metadata["function_name"] = function_name

    if metadata:
        response_metadata.update(metadata)

    return {
        "success": True,
        "data": data,
        "metadata": response_metadata
    }


def create_failure_response(error_code: str, message: str, details: Optional[Dict[str, Any]] = None, function_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Create protocol-agnostic failure payload

    Args:
        error_code: Error code (e.g., 'VALIDATION_ERROR', 'NOT_FOUND', 'INTERNAL_ERROR')
        message: Human-readable error message
        details: Optional error details dict
        function_name: Name of the function generating the response

    Returns:
        Failure payload
    """
    response = {
        "success": False,
        "error": {
            "code": error_code,
            "message": message
        }
    }

    if details:
        response["error"]["details"] = details

    response_metadata = {
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

    if function_name:
        response_metadata["function_name"] = function_name

    response["metadata"] = response_metadata

    return response


def create_ok_response(data: Any, event: Optional[dict] = None, status_code: int = HTTPConstants.OK,
                       metadata: Optional[Dict[str, Any]] = None, function_name: Optional[str] = None) -> Dict[str, Any]:
    """Lambda proxy response carrying a success payload"""
    return create_response(
        status_code,
        json.dumps(create_success_response(data, metadata, function_name)),
        event
    )


def create_error_response(status_code: int, message: str, event: Optional[dict] = None,
                          details: Optional[dict] = None, error_code: Optional[str] = None,
                          function_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Create standardized error response

    Args:
        status_code: HTTP status code
        message: Error message
        event: Original Lambda event for context
        details: Additional error details
        error_code: Error code, derived from the status code when omitted

    Returns:
        Lambda proxy integration error response
    """
    if error_code is None:
        error_code = {
            HTTPConstants.BAD_REQUEST: ErrorCodes.VALIDATION_ERROR,
            HTTPConstants.NOT_FOUND: ErrorCodes.NOT_FOUND,
            HTTPConstants.FORBIDDEN: ErrorCodes.UNAUTHORIZED,
            HTTPConstants.METHOD_NOT_ALLOWED: ErrorCodes.METHOD_NOT_ALLOWED,
        }.get(status_code, ErrorCodes.INTERNAL_ERROR)

    return create_response(
        status_code,
        json.dumps(create_failure_response(error_code, message, details, function_name)),
        event
    )


def generate_public_url(bucket_name: str, s3_key: str) -> str:
    """
    Public URL the stored image is served from

    Args:
        bucket_name: S3 bucket name
        s3_key: S3 object key

    Returns:
        Public S3 URL
    """
    return f"https://{bucket_name}.s3.amazonaws.com/{s3_key}"


def generate_upload_url(bucket_name: str, s3_key: str, expiry_seconds: Optional[int] = None,
                        content_type: Optional[str] = None) -> str:
    """
    Generate presigned PUT URL for a direct client upload

    Args:
        bucket_name: S3 bucket name
        s3_key: Object key the bytes will be written to
        expiry_seconds: URL expiry in seconds (default from config)
        content_type: Content type the client must send, if any

    Returns:
        Presigned URL

    Raises:
        BlobStoreError: If the URL cannot be generated
    """
    if expiry_seconds is None:
        expiry_seconds = config.upload_url_expiry

    params = {'Bucket': bucket_name, 'Key': s3_key}
    if content_type:
        params['ContentType'] = content_type

    try:
        s3_client = boto3.client('s3', region_name=config.aws_region)
        upload_url = s3_client.generate_presigned_url(
            'put_object',
            Params=params,
            ExpiresIn=expiry_seconds
        )
    except (ClientError, BotoCoreError) as e:
        raise error_handler.handle_s3_error(e, 'generate_upload_url', bucket_name, s3_key) from e

    logger.log_s3_operation(bucket_name, 'generate_upload_url', key=s3_key, expires_in=expiry_seconds)
    return upload_url


def delete_blob(bucket_name: str, s3_key: str) -> bool:
    """
    Release the bytes stored under a blob handle

    Args:
        bucket_name: S3 bucket name
        s3_key: S3 object key (the photo storage id)

    Returns:
        True once S3 accepted the delete

    Raises:
        BlobStoreError: If S3 rejects the delete
    """
    try:
        s3_client = boto3.client('s3', region_name=config.aws_region)
        s3_client.delete_object(Bucket=bucket_name, Key=s3_key)
    except (ClientError, BotoCoreError) as e:
        logger.log_s3_operation(bucket_name, 'delete', key=s3_key, success=False, error=str(e))
        raise error_handler.handle_s3_error(e, 'delete', bucket_name, s3_key) from e

    logger.log_s3_operation(bucket_name, 'delete', key=s3_key)
    return True
