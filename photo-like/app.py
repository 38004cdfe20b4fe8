"""
Photo Like Lambda Function
Toggles the caller's like on a photo
"""
import os
import sys

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from photostream.decorators import api_gateway_handler
from photostream.services.service_container import get_service
from photostream.utils import create_ok_response


@api_gateway_handler(
    required_fields=['user_id'],
    required_path_params=['photo_id'],
    allowed_methods=['POST']
)
def lambda_handler(event, context):
    """
    POST /photos/{photo_id}/like

    Expected request body:
    {"user_id": "user_k3j9x0a1b"}

    Returns the caller's new liked state.
    """
    photo_id = event['path_params']['photo_id']
    user_id = event['parsed_body']['user_id']

    liked = get_service('photo_service').toggle_like(photo_id, user_id)

    return create_ok_response(
        {'photo_id': photo_id, 'liked': liked},
        event,
        function_name='photo-like'
    )
