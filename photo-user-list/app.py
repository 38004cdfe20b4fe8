"""
User Photos Lambda Function
All photos uploaded by one user, newest first
"""
import os
import sys

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from photostream.decorators import api_gateway_handler
from photostream.services.service_container import get_service
from photostream.utils import create_ok_response


@api_gateway_handler(required_path_params=['user_id'], allowed_methods=['GET'])
def lambda_handler(event, context):
    """
    GET /users/{user_id}/photos
    """
    user_id = event['path_params']['user_id']

    items = get_service('photo_service').list_by_user(user_id)

    return create_ok_response(
        {'user_id': user_id, 'items': items},
        event,
        metadata={'returned': len(items)},
        function_name='photo-user-list'
    )
