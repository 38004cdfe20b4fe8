"""
Lambda request decorators for the photo feed service
"""
import json
import time
from functools import wraps
from typing import Callable, List
from .constants import HTTPConstants, ErrorCodes
from .error_handler import error_handler
from .exceptions import PhotoStreamError
from .validation_utils import validate_required_fields
from .utils import create_error_response
from .logger import logger


def _parse_body(event: dict) -> dict:
    """
    Request body for API Gateway proxy events; the event itself for direct invocations

    Raises:
        ValueError: If the body is not a JSON object
    """
    if 'body' not in event and 'httpMethod' not in event and 'requestContext' not in event:
        return dict(event)

    raw_body = event.get('body')
    if not raw_body:
        return {}

    if isinstance(raw_body, dict):
        return raw_body

    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError:
        raise ValueError('Invalid JSON in request body')

    if not isinstance(body, dict):
        raise ValueError('Request body must be a JSON object')

    return body


def api_gateway_handler(
    required_fields: List[str] = None,
    required_path_params: List[str] = None,
    allowed_methods: List[str] = None,
    log_requests: bool = True
):
    """
    Decorator for API Gateway proxy handlers

    Parses the request into event['parsed_body'], event['query_params'] and
    event['path_params'], validates required inputs and converts service
    exceptions into failure responses.

    Args:
        required_fields: Fields that must be present and non-empty in the body
        required_path_params: Path parameters that must be present
        allowed_methods: HTTP methods accepted (None accepts any)
        log_requests: Whether to log request start/end
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(event, context):
            start_time = time.time()
            function_name = getattr(func, '__name__', 'unknown')
            event = event if isinstance(event, dict) else {}

            if log_requests:
                logger.log_lambda_start(function_name, event, context)

            def finish(success: bool, **kwargs):
                if log_requests:
                    duration_ms = (time.time() - start_time) * 1000
                    logger.log_lambda_end(function_name, success, duration_ms, **kwargs)

            try:
                method = event.get('httpMethod')
                if allowed_methods and method and method.upper() not in allowed_methods:
                    finish(False, error='method not allowed')
                    return create_error_response(
                        HTTPConstants.METHOD_NOT_ALLOWED,
                        f'Method {method} not allowed',
                        event,
                        {'allowed_methods': allowed_methods}
                    )

                body = _parse_body(event)
                query_params = event.get('queryStringParameters') or {}
                path_params = event.get('pathParameters') or {}

                # Direct invocations carry path parameters in the payload
                if 'httpMethod' not in event and 'requestContext' not in event:
                    path_params = {**body, **path_params}
                    query_params = {**body, **query_params}

                event['parsed_body'] = body
                event['query_params'] = query_params
                event['path_params'] = path_params

                if required_path_params:
                    missing_params = validate_required_fields(path_params, required_path_params)
                    if missing_params:
                        finish(False, error='missing path parameters')
                        return create_error_response(
                            HTTPConstants.BAD_REQUEST,
                            f'Missing path parameters: {", ".join(missing_params)}',
                            event,
                            {'missing_fields': missing_params}
                        )

                if required_fields:
                    missing_fields = validate_required_fields(body, required_fields)
                    if missing_fields:
                        finish(False, error='missing fields')
                        return create_error_response(
                            HTTPConstants.BAD_REQUEST,
                            f'Missing required fields: {", ".join(missing_fields)}',
                            event,
                            {'missing_fields': missing_fields}
                        )

                result = func(event, context)

                finish(True)
                return result

            except PhotoStreamError as e:
                finish(False, error=e.message, error_code=e.error_code, error_details=e.details)
                described = error_handler.describe(e)
                return create_error_response(
                    described['status_code'],
                    e.message,
                    event,
                    described['error'].get('details'),
                    described['error']['code']
                )

            except ValueError as e:
                finish(False, error=str(e))
                return create_error_response(
                    HTTPConstants.BAD_REQUEST,
                    str(e),
                    event,
                    error_code=ErrorCodes.VALIDATION_ERROR
                )

            except Exception as e:
                finish(False, error=str(e))
                logger.error(f"Unexpected error in {function_name}", error=e)

                return create_error_response(
                    HTTPConstants.INTERNAL_SERVER_ERROR,
                    'Internal server error occurred',
                    event,
                    error_code=ErrorCodes.INTERNAL_ERROR
                )

        return wrapper
    return decorator
