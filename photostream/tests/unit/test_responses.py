"""
Unit tests for response headers and package logging setup
"""
import json
import logging

from photostream import logger as logger_module
from photostream.config import config
from photostream.utils import create_error_response, create_ok_response

ALLOWED = 'https://a.example.com,https://b.example.com'


def event_from(origin_header, origin):
    return {'httpMethod': 'GET', 'headers': {origin_header: origin}}


class TestCorsHeaders:

    def test_wildcard_in_test_environment(self):
        response = create_ok_response({}, event_from('Origin', 'https://anything.example.com'))

        assert response['headers']['Access-Control-Allow-Origin'] == '*'
        assert 'Vary' not in response['headers']

    def test_listed_origin_is_echoed(self, monkeypatch):
        monkeypatch.setattr(config, 'environment', 'prod')
        monkeypatch.setenv('PHOTOSTREAM_ALLOWED_ORIGINS', ALLOWED)

        response = create_ok_response({}, event_from('Origin', 'https://b.example.com'))

        assert response['headers']['Access-Control-Allow-Origin'] == 'https://b.example.com'
        assert response['headers']['Vary'] == 'Origin'

    def test_origin_header_name_is_case_insensitive(self, monkeypatch):
        monkeypatch.setattr(config, 'environment', 'prod')
        monkeypatch.setenv('PHOTOSTREAM_ALLOWED_ORIGINS', ALLOWED)

        response = create_error_response(404, 'nope', event_from('origin', 'https://a.example.com'))

        assert response['headers']['Access-Control-Allow-Origin'] == 'https://a.example.com'

    def test_unlisted_origin_gets_no_allow_origin(self, monkeypatch):
        monkeypatch.setattr(config, 'environment', 'prod')
        monkeypatch.setenv('PHOTOSTREAM_ALLOWED_ORIGINS', ALLOWED)

        response = create_ok_response({}, event_from('Origin', 'https://evil.example.com'))

        assert 'Access-Control-Allow-Origin' not in response['headers']
        assert response['headers']['Vary'] == 'Origin'

    def test_never_joins_origins(self, monkeypatch):
        monkeypatch.setattr(config, 'environment', 'prod')
        monkeypatch.setenv('PHOTOSTREAM_ALLOWED_ORIGINS', ALLOWED)

        response = create_ok_response({}, None)

        assert ',' not in response['headers'].get('Access-Control-Allow-Origin', '')


class ListHandler(logging.Handler):

    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


class TestPackageLogger:

    def test_root_logger_untouched(self):
        package_logger = logging.getLogger('photostream')

        assert package_logger.propagate is False
        assert len(package_logger.handlers) == 1
        assert all(
            getattr(handler.formatter, '_fmt', None) != '%(message)s'
            for handler in logging.getLogger().handlers
        )

    def test_entries_are_json_on_package_logger(self):
        handler = ListHandler()
        package_logger = logging.getLogger('photostream')
        package_logger.addHandler(handler)
        try:
            logger_module.photo_logger.info('Feed page served', returned=3)
        finally:
            package_logger.removeHandler(handler)

        entry = json.loads(handler.messages[-1])
        assert entry['message'] == 'Feed page served'
        assert entry['service'] == 'photo-service'
        assert entry['returned'] == 3
