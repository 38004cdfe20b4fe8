"""
Pytest configuration and fixtures for photostream-feed-service tests
Provides moto-backed DynamoDB/S3, Lambda events and a controllable clock
"""
import importlib.util
import json
import os
import pytest
import boto3
from moto import mock_aws
from unittest.mock import MagicMock


# Set test environment variables before any photostream module reads config
os.environ.update({
    'AWS_DEFAULT_REGION': 'us-east-1',
    'AWS_ACCESS_KEY_ID': 'testing',
    'AWS_SECRET_ACCESS_KEY': 'testing',
    'AWS_SECURITY_TOKEN': 'testing',
    'AWS_SESSION_TOKEN': 'testing',
    'ENVIRONMENT': 'test',
    'PHOTOSTREAM_PHOTO_TABLE_NAME': 'Photos-test',
    'PHOTOSTREAM_USER_TABLE_NAME': 'Users-test',
    'PHOTOSTREAM_PHOTO_BUCKET_NAME': 'photostream-photos-test',
    'PHOTOSTREAM_UPLOAD_URL_EXPIRY': '900',
    'PHOTOSTREAM_FEED_DEFAULT_PAGE_SIZE': '20',
    'PHOTOSTREAM_FEED_MAX_PAGE_SIZE': '50',
    'PHOTOSTREAM_LIKE_MAX_ATTEMPTS': '3',
    'PHOTOSTREAM_ENABLE_DEBUG_LOGGING': 'false'
})

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))

PHOTO_TABLE = 'Photos-test'
USER_TABLE = 'Users-test'
PHOTO_BUCKET = 'photostream-photos-test'


@pytest.fixture(autouse=True)
def reset_services():
    """Drop cached service instances between tests"""
    from photostream.services.service_container import clear_services
    clear_services()
    yield
    clear_services()


@pytest.fixture
def mock_aws_services():
    """Start moto and create the tables and bucket the service expects"""
    with mock_aws():
        create_test_tables()
        create_test_s3_buckets()
        yield {
            'dynamodb': boto3.client('dynamodb', region_name='us-east-1'),
            's3': boto3.client('s3', region_name='us-east-1')
        }


def create_test_tables():
    """Create DynamoDB test tables matching the PynamoDB models"""
    dynamodb = boto3.client('dynamodb', region_name='us-east-1')

    dynamodb.create_table(
        TableName=PHOTO_TABLE,
        KeySchema=[
            {'AttributeName': 'photo_id', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'photo_id', 'AttributeType': 'S'},
            {'AttributeName': 'feed_key', 'AttributeType': 'S'},
            {'AttributeName': 'user_id', 'AttributeType': 'S'},
            {'AttributeName': 'created_at', 'AttributeType': 'N'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': 'feed-index',
                'KeySchema': [
                    {'AttributeName': 'feed_key', 'KeyType': 'HASH'},
                    {'AttributeName': 'created_at', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            },
            {
                'IndexName': 'user-photos-index',
                'KeySchema': [
                    {'AttributeName': 'user_id', 'KeyType': 'HASH'},
                    {'AttributeName': 'created_at', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            }
        ],
        BillingMode='PAY_PER_REQUEST'
    )

    dynamodb.create_table(
        TableName=USER_TABLE,
        KeySchema=[
            {'AttributeName': 'user_id', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'user_id', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )

    waiter = dynamodb.get_waiter('table_exists')
    waiter.wait(TableName=PHOTO_TABLE)
    waiter.wait(TableName=USER_TABLE)


def create_test_s3_buckets():
    """Create S3 test bucket"""
    s3 = boto3.client('s3', region_name='us-east-1')
    s3.create_bucket(Bucket=PHOTO_BUCKET)


class FakeClock:
    """Millisecond clock that advances by a fixed step on every read"""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def photo_service(mock_aws_services, clock):
    """PhotoService over moto with distinct, increasing created_at values"""
    from photostream.services.photo_service import PhotoService
    from photostream.services.service_container import register_service

    service = PhotoService(bucket_name=PHOTO_BUCKET, clock=clock)
    register_service('photo_service', service)
    return service


@pytest.fixture
def user_service(mock_aws_services):
    from photostream.services.user_service import UserService
    return UserService()


@pytest.fixture
def load_function_app():
    """
    Import a function directory's app.py under a unique module name

    Every Lambda ships its own app.py, so a plain 'import app' would collide.
    """
    def _load(function_dir: str):
        path = os.path.join(ROOT_DIR, function_dir, 'app.py')
        module_name = f"{function_dir.replace('-', '_')}_app"
        spec = importlib.util.spec_from_file_location(module_name, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    return _load


@pytest.fixture
def lambda_context():
    """Mock Lambda context"""
    context = MagicMock()
    context.function_name = 'test-function'
    context.function_version = '$LATEST'
    context.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:test-function'
    context.memory_limit_in_mb = 128
    context.remaining_time_in_millis = lambda: 30000
    context.aws_request_id = 'test-request-id'
    return context


@pytest.fixture
def api_gateway_event():
    """Mock API Gateway proxy event; tests fill in method, path and body"""
    return {
        'httpMethod': 'POST',
        'path': '/test',
        'resource': '/test',
        'requestContext': {
            'accountId': '123456789012',
            'apiId': 'test-api',
            'stage': 'test',
            'requestId': 'test-request-id',
            'identity': {
                'sourceIp': '127.0.0.1'
            }
        },
        'headers': {
            'Content-Type': 'application/json'
        },
        'queryStringParameters': None,
        'pathParameters': None,
        'body': json.dumps({}),
        'isBase64Encoded': False
    }


@pytest.fixture
def make_photo(photo_service):
    """Create a photo through the service and return its id"""
    def _make(user_id: str = 'user_alice0001', username: str = 'alice', storage_id: str = None):
        storage_id = storage_id or f"uploads/{user_id}_{photo_service.clock.now}"
        return photo_service.create_photo(
            image_url=f"https://{PHOTO_BUCKET}.s3.amazonaws.com/{storage_id}",
            storage_id=storage_id,
            user_id=user_id,
            username=username
        )
    return _make

