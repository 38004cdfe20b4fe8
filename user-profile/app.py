"""
User Profile Lambda Function
Reads or saves the display profile for a client-generated user id
"""
import os
import sys

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from photostream.decorators import api_gateway_handler
from photostream.exceptions import UserNotFoundError
from photostream.services.service_container import get_service
from photostream.utils import create_ok_response


@api_gateway_handler(required_path_params=['user_id'], allowed_methods=['GET', 'PUT'])
def lambda_handler(event, context):
    """
    GET /users/{user_id}
    PUT /users/{user_id}  body: {"username": "alice", "avatar": "https://..."}

    Saving a profile does not rewrite photos uploaded earlier.
    """
    user_id = event['path_params']['user_id']
    user_service = get_service('user_service')

    if event.get('httpMethod', 'GET').upper() == 'PUT':
        body = event['parsed_body']
        profile = user_service.save_profile(user_id, body.get('username'), body.get('avatar'))
        return create_ok_response(profile, event, function_name='user-profile')

    profile = user_service.get_profile(user_id)
    if profile is None:
        raise UserNotFoundError(user_id)

    return create_ok_response(profile, event, function_name='user-profile')
