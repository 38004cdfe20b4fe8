"""
Configuration management for the photo feed service
Supports environment variables, SSM Parameter Store, and local .env files
"""
import os
import logging
from typing import Optional, Any
from functools import lru_cache
import boto3
from botocore.exceptions import ClientError, NoCredentialsError
from dotenv import load_dotenv
from .constants import FeedConstants


_log = logging.getLogger(__name__)


class Config:
    """
    Configuration manager with hybrid approach:
    1. Environment Variables (highest priority, .env file included)
    2. AWS Parameter Store (environment-specific)
    3. Local defaults (development fallback)
    """

    def __init__(self, dotenv_path: Optional[str] = None):
        # Real environment variables always win over .env entries
        load_dotenv(dotenv_path, override=False)

        self.environment = os.environ.get('ENVIRONMENT', 'dev')
        self.parameter_store_prefix = os.environ.get(
            'PARAMETER_STORE_PREFIX',
            f'/photostream/{self.environment}/feed-service'
        )
        self._ssm_client = None

    @property
    def ssm_client(self):
        """Lazy initialization of SSM client"""
        if self._ssm_client is None:
            try:
                self._ssm_client = boto3.client('ssm', region_name=self.aws_region)
            except NoCredentialsError:
                # Local development without AWS credentials
                self._ssm_client = None
        return self._ssm_client

    @property
    def aws_region(self) -> str:
        return os.environ.get('PHOTOSTREAM_AWS_REGION') or os.environ.get('AWS_DEFAULT_REGION', 'us-east-1')

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """
        Get configuration parameter with fallback hierarchy:
        1. Environment variable
        2. SSM Parameter Store
        3. Default value
        """
        env_key = f"PHOTOSTREAM_{key.upper().replace('-', '_')}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        env_value = os.environ.get(key.upper().replace('-', '_'))
        if env_value is not None:
            return env_value

        ssm_value = self.get_ssm_parameter(key)
        if ssm_value is not None:
            return ssm_value

        return default

    @lru_cache(maxsize=128)
    def get_ssm_parameter(self, key: str) -> Optional[str]:
        """
        Get parameter from AWS SSM Parameter Store with caching
        """
        if not self.ssm_client:
            return None

        parameter_name = f"{self.parameter_store_prefix}/{key}"

        try:
            response = self.ssm_client.get_parameter(Name=parameter_name)
            return response['Parameter']['Value']
        except ClientError as e:
            if e.response['Error']['Code'] != 'ParameterNotFound':
                _log.warning("Error getting SSM parameter %s: %s", parameter_name, e)
            return None
        except Exception as e:
            _log.warning("Unexpected error getting SSM parameter %s: %s", parameter_name, e)
            return None

    def get_int_parameter(self, key: str, default: int = 0) -> int:
        """Get integer parameter"""
        value = self.get_parameter(key, default)
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    def get_bool_parameter(self, key: str, default: bool = False) -> bool:
        """Get boolean parameter"""
        value = self.get_parameter(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ('true', '1', 'yes', 'on')
        return default

    def get_list_parameter(self, key: str, default: list = None, separator: str = ',') -> list:
        """Get list parameter (comma-separated string)"""
        value = self.get_parameter(key)
        if value is None:
            return default or []

        if isinstance(value, list):
            return value

        if isinstance(value, str):
            return [item.strip() for item in value.split(separator) if item.strip()]

        return default or []

    # Common configuration getters
    @property
    def photo_table_name(self) -> str:
        return self.get_parameter('photo-table-name', f'Photos-{self.environment}')

    @property
    def user_table_name(self) -> str:
        return self.get_parameter('user-table-name', f'Users-{self.environment}')

    @property
    def photo_bucket_name(self) -> str:
        return self.get_parameter('photo-bucket-name', f'photostream-photos-{self.environment}')

    @property
    def upload_url_expiry(self) -> int:
        """Presigned upload URL lifetime in seconds"""
        return self.get_int_parameter('upload-url-expiry', 900)

    @property
    def feed_default_page_size(self) -> int:
        return self.get_int_parameter('feed-default-page-size', FeedConstants.DEFAULT_PAGE_SIZE)

    @property
    def feed_max_page_size(self) -> int:
        return self.get_int_parameter('feed-max-page-size', FeedConstants.MAX_PAGE_SIZE)

    @property
    def like_max_attempts(self) -> int:
        """Optimistic retries for a like toggle that lost a race"""
        return max(1, self.get_int_parameter('like-max-attempts', 3))

    @property
    def enable_debug_logging(self) -> bool:
        return self.get_bool_parameter('enable-debug-logging', False)

    @property
    def cors_allowed_origins(self) -> list:
        if self.environment in ('dev', 'test'):
            return ['*']
        return self.get_list_parameter('allowed-origins', ['*'])


# Global configuration instance
config = Config()
