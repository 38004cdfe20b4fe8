"""
CloudWatch logging utilities for the photo feed service
"""
import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict
from .config import config


PACKAGE_LOGGER_NAME = 'photostream'


def _configure_package_logger() -> logging.Logger:
    """
    Attach one stdout handler to the 'photostream' logger

    The root logger is left alone so importers keep their own logging setup.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(message)s'))
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)
    package_logger.propagate = False
    return package_logger


_configure_package_logger()


class FeedLogger:
    """
    Structured logger emitting one JSON document per line (CloudWatch friendly)
    """

    def __init__(self, service_name: str = "feed-service"):
        self.service_name = service_name
        self.environment = config.environment
        self._logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{service_name}")

    @property
    def debug_enabled(self) -> bool:
        return config.enable_debug_logging

    def _log(self, level: str, message: str, **kwargs):
        """Internal log method with structured format"""
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level.upper(),
            'service': self.service_name,
            'environment': self.environment,
            'message': message
        }

        if kwargs:
            log_entry.update(kwargs)

        # Debug entries are gated by config, so they are emitted at INFO or above
        self._logger.log(
            max(getattr(logging, level.upper()), logging.INFO),
            json.dumps(log_entry, default=str)
        )

    def debug(self, message: str, **kwargs):
        """Log debug message (only if debug enabled)"""
        if self.debug_enabled:
            self._log('debug', message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log('info', message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log('warning', message, **kwargs)

    def error(self, message: str, error: Exception = None, **kwargs):
        """Log error message with optional exception details"""
        log_data = kwargs.copy()

        if error:
            log_data['error_type'] = type(error).__name__
            log_data['error_message'] = str(error)
            log_data['traceback'] = ''.join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )

        self._log('error', message, **log_data)

    def log_lambda_start(self, function_name: str, event: dict, context=None):
        """Log Lambda function start"""
        log_data = {
            'function_name': function_name,
            'request_id': getattr(context, 'aws_request_id', 'unknown') if context else 'unknown',
        }

        if isinstance(event, dict):
            log_data['http_method'] = event.get('httpMethod')
            log_data['path'] = event.get('path')
            log_data['has_body'] = bool(event.get('body'))

        self._log('info', f"Lambda function {function_name} started", **log_data)

    def log_lambda_end(self, function_name: str, success: bool = True, duration_ms: float = None, **kwargs):
        """Log Lambda function completion"""
        log_data = {
            'function_name': function_name,
            'success': success,
        }

        if duration_ms is not None:
            log_data['duration_ms'] = round(duration_ms, 2)

        log_data.update(kwargs)

        level = 'info' if success else 'error'
        message = f"Lambda function {function_name} {'completed' if success else 'failed'}"

        self._log(level, message, **log_data)

    def log_service_operation(self, operation: str, **kwargs):
        """Log service operation"""
        self._log('info', f"Service operation: {operation}", operation=operation, **kwargs)

    def log_database_operation(self, table_name: str, operation: str, success: bool = True, **kwargs):
        """Log database operation"""
        log_data: Dict[str, Any] = {
            'table_name': table_name,
            'operation': operation,
            'success': success
        }
        log_data.update(kwargs)

        level = 'info' if success else 'error'
        message = f"Database {operation} on {table_name} {'succeeded' if success else 'failed'}"

        self._log(level, message, **log_data)

    def log_s3_operation(self, bucket_name: str, operation: str, key: str = None, success: bool = True, **kwargs):
        """Log S3 operation"""
        log_data: Dict[str, Any] = {
            'bucket_name': bucket_name,
            'operation': operation,
            'success': success
        }

        if key:
            log_data['s3_key'] = key

        log_data.update(kwargs)

        level = 'info' if success else 'error'
        message = f"S3 {operation} on {bucket_name} {'succeeded' if success else 'failed'}"

        self._log(level, message, **log_data)


# Global logger instances
logger = FeedLogger("feed-service")
photo_logger = FeedLogger("photo-service")
user_logger = FeedLogger("user-service")
