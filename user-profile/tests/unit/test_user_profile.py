"""
Unit tests for the user-profile Lambda function
"""
import json
import pytest


@pytest.fixture
def app(load_function_app):
    return load_function_app('user-profile')


@pytest.fixture
def profile_event(api_gateway_event):
    def _event(user_id, method='GET', body=None):
        api_gateway_event['httpMethod'] = method
        api_gateway_event['path'] = f'/users/{user_id}'
        api_gateway_event['pathParameters'] = {'user_id': user_id}
        api_gateway_event['body'] = json.dumps(body) if body is not None else None
        return api_gateway_event
    return _event


class TestUserProfileHandler:

    def test_put_then_get(self, app, mock_aws_services, profile_event, lambda_context):
        put = app.lambda_handler(
            profile_event('user_k3j9x0a1b', 'PUT', {'username': 'alice', 'avatar': 'https://x/a.png'}),
            lambda_context
        )
        assert put['statusCode'] == 200

        get = app.lambda_handler(profile_event('user_k3j9x0a1b'), lambda_context)
        data = json.loads(get['body'])['data']

        assert data['username'] == 'alice'
        assert data['avatar'] == 'https://x/a.png'

    def test_unknown_user(self, app, mock_aws_services, profile_event, lambda_context):
        response = app.lambda_handler(profile_event('user_nobody001'), lambda_context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert body['error']['details']['entity_type'] == 'user'

    def test_put_requires_username(self, app, mock_aws_services, profile_event, lambda_context):
        response = app.lambda_handler(profile_event('user_k3j9x0a1b', 'PUT', {}), lambda_context)

        assert response['statusCode'] == 400

    def test_profile_change_does_not_rewrite_photos(self, app, photo_service, make_photo, profile_event, lambda_context):
        photo_id = make_photo(user_id='user_k3j9x0a1b', username='alice')

        app.lambda_handler(profile_event('user_k3j9x0a1b', 'PUT', {'username': 'alicia'}), lambda_context)

        assert photo_service.get_photo(photo_id)['username'] == 'alice'
