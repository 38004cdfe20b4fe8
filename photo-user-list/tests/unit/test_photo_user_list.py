"""
Unit tests for the photo-user-list Lambda function
"""
import json
import pytest


@pytest.fixture
def app(load_function_app):
    return load_function_app('photo-user-list')


def user_photos_event(api_gateway_event, user_id):
    api_gateway_event['httpMethod'] = 'GET'
    api_gateway_event['path'] = f'/users/{user_id}/photos'
    api_gateway_event['pathParameters'] = {'user_id': user_id}
    api_gateway_event['body'] = None
    return api_gateway_event


class TestPhotoUserListHandler:

    def test_lists_user_photos(self, app, make_photo, api_gateway_event, lambda_context):
        older = make_photo(user_id='u1')
        make_photo(user_id='u2')
        newer = make_photo(user_id='u1')

        response = app.lambda_handler(user_photos_event(api_gateway_event, 'u1'), lambda_context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body['data']['user_id'] == 'u1'
        assert [item['photo_id'] for item in body['data']['items']] == [newer, older]
        assert body['metadata']['returned'] == 2

    def test_user_without_photos(self, app, photo_service, api_gateway_event, lambda_context):
        response = app.lambda_handler(user_photos_event(api_gateway_event, 'u404'), lambda_context)

        assert json.loads(response['body'])['data']['items'] == []

    def test_missing_path_parameter(self, app, photo_service, api_gateway_event, lambda_context):
        api_gateway_event['httpMethod'] = 'GET'

        response = app.lambda_handler(api_gateway_event, lambda_context)

        assert response['statusCode'] == 400
